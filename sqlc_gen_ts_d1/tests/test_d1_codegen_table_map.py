import pytest

from sqlc_gen_ts_d1.d1_codegen.ir import Catalog, Column, Identifier
from sqlc_gen_ts_d1.d1_codegen.table_map import TableMap
from sqlc_gen_ts_d1.shared.errors import InconsistentSchemaError


class TestTableMap:
    def test_build(self, catalog):
        table_map = TableMap.build(catalog)
        assert len(table_map) == 2

    def test_find_table(self, catalog, users_table):
        table_map = TableMap.build(catalog)
        assert table_map.find_table(Identifier("users")) is users_table
        assert table_map.find_table(Identifier("missing")) is None
        assert table_map.find_table(None) is None

    def test_find_column(self, catalog):
        table_map = TableMap.build(catalog)
        found = table_map.find_column(Column(name="name", table=Identifier("users")))
        assert found is not None
        assert found.not_null is False

    def test_find_column_without_table(self, catalog):
        table_map = TableMap.build(catalog)
        assert table_map.find_column(Column(name="name")) is None

    def test_find_column_unknown(self, catalog):
        table_map = TableMap.build(catalog)
        assert table_map.find_column(Column(name="name", table=Identifier("missing"))) is None
        assert table_map.find_column(Column(name="missing", table=Identifier("users"))) is None

    def test_require_table(self, catalog, posts_table):
        table_map = TableMap.build(catalog)
        assert table_map.require_table(Identifier("posts"), "Q") is posts_table

    def test_require_table_missing(self, catalog):
        table_map = TableMap.build(catalog)
        with pytest.raises(InconsistentSchemaError) as exc_info:
            table_map.require_table(Identifier("comments"), "ListComments")
        assert exc_info.value.table_name == "comments"
        assert exc_info.value.query_name == "ListComments"

    def test_empty_catalog(self):
        table_map = TableMap.build(Catalog())
        assert len(table_map) == 0
        assert table_map.find_table(Identifier("users")) is None
