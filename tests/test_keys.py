"""Tests for view keys and columns."""

from normalize1nf.keys import view_columns, view_foreign_key, view_primary_key
from normalize1nf.naming import NamingPatterns
from normalize1nf.sql import ColumnKind


class TestViewPrimaryKey:
    def test_array_key_ends_with_index_column(self):
        primary_key = view_primary_key(
            "t", "tags", ["tenant", "code"], ColumnKind.ARRAY, NamingPatterns()
        )
        assert primary_key.column_names == ["t_tenant", "t_code", "array_index"]
        assert primary_key.name is None

    def test_json_key_has_no_index_column(self):
        primary_key = view_primary_key(
            "t", "meta", ["id"], ColumnKind.JSON, NamingPatterns.json_defaults()
        )
        assert primary_key.column_names == ["t_id"]


class TestViewForeignKey:
    def test_references_original_table_in_key_order(self):
        foreign_key = view_foreign_key("t", ["tenant", "code"], NamingPatterns())
        assert foreign_key.referenced_table == "t"
        assert [(r.column, r.referenced) for r in foreign_key.references] == [
            ("t_tenant", "tenant"),
            ("t_code", "code"),
        ]


class TestViewColumns:
    def test_array_columns_follow_query_order(self):
        columns = view_columns("t", "tags", ["id"], ColumnKind.ARRAY, NamingPatterns())
        assert [c.name for c in columns] == ["t_id", "array_index", "tags_item"]

    def test_primary_key_columns_are_projected(self):
        for kind in ColumnKind:
            columns = {
                c.name for c in view_columns("t", "c", ["a", "b"], kind, NamingPatterns())
            }
            primary_key = view_primary_key("t", "c", ["a", "b"], kind, NamingPatterns())
            assert set(primary_key.column_names) <= columns
