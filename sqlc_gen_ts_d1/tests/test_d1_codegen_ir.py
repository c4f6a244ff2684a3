import base64

import pytest

from sqlc_gen_ts_d1.d1_codegen.ir import (
    Column,
    GenerateRequest,
    Identifier,
    Query,
)
from sqlc_gen_ts_d1.shared.errors import RequestError

REQUEST = {
    "settings": {
        "version": "2",
        "engine": "sqlite",
        "overrides": [{"db_type": "DATETIME", "code_type": "Date"}],
        "codegen": {"wasm": {"sha256": "abc123"}},
    },
    "catalog": {
        "default_schema": "main",
        "schemas": [
            {
                "name": "main",
                "tables": [
                    {
                        "rel": {"name": "users"},
                        "columns": [
                            {"name": "id", "not_null": True, "type": {"name": "INTEGER"}},
                            {"name": "name", "type": {"name": "TEXT"}},
                        ],
                    }
                ],
            }
        ],
    },
    "queries": [
        {
            "text": "SELECT id, name FROM users WHERE id = ?1",
            "name": "GetUser",
            "cmd": ":one",
            "columns": [
                {"name": "id", "not_null": True, "type": {"name": "INTEGER"}, "table": {"name": "users"}},
                {"name": "name", "type": {"name": "TEXT"}, "table": {"name": "users"}},
            ],
            "params": [
                {
                    "number": 1,
                    "column": {"name": "id", "not_null": True, "type": {"name": "INTEGER"}, "table": {"name": "users"}},
                }
            ],
            "filename": "users.sql",
        }
    ],
    "sqlc_version": "v1.25.0",
    "plugin_options": base64.b64encode(b'{"workers-types":"2023-07-01"}').decode(),
}


class TestIdentifier:
    def test_equality_by_name(self):
        assert Identifier("users", schema="main") == Identifier("users", schema="other")
        assert Identifier("users") != Identifier("posts")

    def test_hash_by_name(self):
        assert hash(Identifier("users", catalog="a")) == hash(Identifier("users", catalog="b"))

    def test_from_dict_none(self):
        assert Identifier.from_dict(None) is None


class TestColumn:
    def test_defaults(self):
        column = Column.from_dict({"name": "id"})
        assert column.name == "id"
        assert column.not_null is False
        assert column.is_sqlc_slice is False
        assert column.table is None
        assert column.embed_table is None
        assert column.db_type == ""
        assert not column.is_embed

    def test_embed(self):
        column = Column.from_dict({"name": "users", "embed_table": {"name": "users"}})
        assert column.is_embed
        assert column.embed_table == Identifier("users")

    def test_empty_embed_table_is_not_embed(self):
        column = Column.from_dict({"name": "id", "embed_table": {"name": ""}})
        assert not column.is_embed

    def test_json_names(self):
        column = Column.from_dict(
            {"name": "ids", "notNull": True, "isSqlcSlice": True, "type": {"name": "INTEGER"}}
        )
        assert column.not_null is True
        assert column.is_sqlc_slice is True


class TestQuery:
    def test_has_slice_params(self):
        query = Query.from_dict(
            {
                "name": "ListFoo",
                "cmd": ":many",
                "text": "SELECT 1",
                "params": [{"number": 1, "column": {"name": "ids", "is_sqlc_slice": True}}],
            }
        )
        assert query.has_slice_params
        assert query.params[0].number == 1

    def test_no_slice_params(self):
        query = Query.from_dict({"name": "Q", "cmd": ":exec", "text": "DELETE FROM t"})
        assert not query.has_slice_params
        assert query.params == ()


class TestGenerateRequest:
    def test_from_dict(self):
        request = GenerateRequest.from_dict(REQUEST)

        assert request.sqlc_version == "v1.25.0"
        assert request.settings.engine == "sqlite"
        assert request.settings.wasm_sha256 == "abc123"
        assert request.settings.overrides[0].db_type == "DATETIME"
        assert request.settings.overrides[0].code_type == "Date"
        assert request.plugin_options == b'{"workers-types":"2023-07-01"}'

        table = request.catalog.schemas[0].tables[0]
        assert table.name == "users"
        assert [c.name for c in table.columns] == ["id", "name"]

        query = request.queries[0]
        assert query.name == "GetUser"
        assert query.cmd == ":one"
        assert query.filename == "users.sql"
        assert query.params[0].column.table == Identifier("users")

    def test_from_empty_dict(self):
        request = GenerateRequest.from_dict({})
        assert request.queries == ()
        assert request.catalog.schemas == ()
        assert request.plugin_options == b""

    def test_camel_case_names(self):
        request = GenerateRequest.from_dict({"sqlcVersion": "v1.26.0", "pluginOptions": ""})
        assert request.sqlc_version == "v1.26.0"
        assert request.plugin_options == b""

    def test_plugin_options_mapping(self):
        request = GenerateRequest.from_dict({"plugin_options": {"workers-types-v3": "1"}})
        assert request.plugin_options == b'{"workers-types-v3":"1"}'

    def test_plugin_options_invalid_base64(self):
        with pytest.raises(RequestError, match="not valid base64"):
            GenerateRequest.from_dict({"plugin_options": "!!!"})

    def test_queries_not_a_list(self):
        with pytest.raises(RequestError, match="'queries' must be a list"):
            GenerateRequest.from_dict({"queries": {"name": "Q"}})

    def test_catalog_not_a_mapping(self):
        with pytest.raises(RequestError, match="'catalog' must be a mapping"):
            GenerateRequest.from_dict({"catalog": []})

    def test_immutable(self):
        request = GenerateRequest.from_dict(REQUEST)
        with pytest.raises(AttributeError):
            request.sqlc_version = "other"
