import pytest

from sqlc_gen_ts_d1.d1_codegen.ir import (
    Catalog,
    Column,
    GenerateRequest,
    Identifier,
    Parameter,
    Query,
    Schema,
    Table,
)


def col(name, db_type="INTEGER", not_null=True, table=None, slice=False, embed=None):
    return Column(
        name=name,
        not_null=not_null,
        type=Identifier(db_type),
        table=Identifier(table) if table else None,
        is_sqlc_slice=slice,
        embed_table=Identifier(embed) if embed else None,
    )


@pytest.fixture
def users_table():
    return Table(
        rel=Identifier("users"),
        columns=(
            col("id", "INTEGER"),
            col("name", "TEXT", not_null=False),
        ),
    )


@pytest.fixture
def posts_table():
    return Table(
        rel=Identifier("posts"),
        columns=(
            col("id", "INTEGER"),
            col("user_id", "INTEGER"),
            col("title", "TEXT"),
        ),
    )


@pytest.fixture
def catalog(users_table, posts_table):
    return Catalog(
        default_schema="main",
        schemas=(Schema(name="main", tables=(users_table, posts_table)),),
    )


@pytest.fixture
def get_user_query():
    return Query(
        name="GetUser",
        cmd=":one",
        text="SELECT id, name FROM users WHERE id = ?1",
        columns=(
            col("id", "INTEGER", table="users"),
            col("name", "TEXT", not_null=False, table="users"),
        ),
        params=(Parameter(1, col("id", "INTEGER", table="users")),),
    )


@pytest.fixture
def embed_query():
    return Query(
        name="ListPostsWithAuthor",
        cmd=":many",
        text=(
            "SELECT posts.id, posts.user_id, posts.title, users.id, users.name "
            "FROM posts JOIN users ON users.id = posts.user_id"
        ),
        columns=(
            col("posts", embed="posts"),
            col("users", embed="users"),
        ),
    )


@pytest.fixture
def slice_query():
    return Query(
        name="ListFoo",
        cmd=":many",
        text="SELECT id, a, b FROM foo WHERE a = ?1 AND id IN (/*SLICE:ids*/?) AND b = ?3",
        columns=(col("id"), col("a"), col("b")),
        params=(
            Parameter(1, col("a")),
            Parameter(2, col("ids", slice=True)),
            Parameter(3, col("b")),
        ),
    )


@pytest.fixture
def make_request(catalog):
    def _make(*queries, plugin_options=b"", **kwargs):
        return GenerateRequest(
            catalog=kwargs.pop("catalog", catalog),
            queries=tuple(queries),
            sqlc_version="v1.25.0",
            plugin_options=plugin_options,
            **kwargs,
        )

    return _make
