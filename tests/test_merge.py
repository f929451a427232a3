"""Tests for MergeReconciler."""

import logging

from normalize1nf.document.models import (
    ColumnConfiguration,
    CustomViewConfiguration,
    ForeignKeyConfiguration,
    ModuleConfiguration,
    PrimaryKeyConfiguration,
    ReferenceConfiguration,
    SchemaConfiguration,
)
from normalize1nf.merge import MergeReconciler


def _generated_view():
    return CustomViewConfiguration(
        name="t__tags",
        simulate_table=True,
        description="Normalized array column t.tags",
        query='select id as "t_id" from "s"."t"',
        primary_key=PrimaryKeyConfiguration(column_names=["t_id", "array_index"]),
        foreign_keys=[
            ForeignKeyConfiguration(
                referenced_table="t",
                references=[ReferenceConfiguration(column="t_id", referenced="id")],
            )
        ],
        columns=[ColumnConfiguration(name="t_id")],
    )


def _merge_document(*views, schema="s"):
    return ModuleConfiguration(
        schemas={schema: SchemaConfiguration(custom_views=list(views))}
    )


class TestApplyOverrides:
    def test_description_only(self):
        generated = _generated_view()
        original = generated.model_copy(deep=True)

        MergeReconciler.apply_overrides(
            generated, CustomViewConfiguration(name="t__tags", description="Tags")
        )

        assert generated.description == "Tags"
        assert generated.query == original.query
        assert generated.columns == original.columns
        assert generated.primary_key == original.primary_key
        assert generated.foreign_keys == original.foreign_keys

    def test_replaced_fields(self):
        generated = _generated_view()
        override = CustomViewConfiguration(
            name="t__tags",
            query="select 1",
            columns=[ColumnConfiguration(name="x")],
            primary_key=PrimaryKeyConfiguration(name="pk", column_names=["x"]),
        )

        MergeReconciler.apply_overrides(generated, override)

        assert generated.query == "select 1"
        assert [c.name for c in generated.columns] == ["x"]
        assert generated.primary_key.name == "pk"
        assert generated.primary_key.column_names == ["x"]

    def test_foreign_keys_are_appended_with_duplicates(self):
        generated = _generated_view()
        same_fk = generated.foreign_keys[0].model_copy(deep=True)

        MergeReconciler.apply_overrides(
            generated, CustomViewConfiguration(name="t__tags", foreign_keys=[same_fk])
        )

        assert len(generated.foreign_keys) == 2
        assert generated.foreign_keys[0] == generated.foreign_keys[1]

    def test_override_is_not_shared(self):
        generated = _generated_view()
        override = CustomViewConfiguration(
            name="t__tags", columns=[ColumnConfiguration(name="x")]
        )

        MergeReconciler.apply_overrides(generated, override)
        generated.columns[0].description = "changed"

        assert override.columns[0].description is None


class TestValidateView:
    def test_missing_query(self, module_configuration):
        reason = MergeReconciler.validate_view(
            CustomViewConfiguration(name="v"), module_configuration
        )
        assert reason == "it has no query"

    def test_blank_query(self, module_configuration):
        reason = MergeReconciler.validate_view(
            CustomViewConfiguration(name="v", query="  "), module_configuration
        )
        assert reason == "it has no query"

    def test_unknown_table(self, module_configuration):
        view = CustomViewConfiguration(
            name="v", query='select * from "s"."t" join "s"."gone" on true'
        )
        reason = MergeReconciler.validate_view(view, module_configuration)
        assert reason == "it references unknown tables: s.gone"

    def test_table_of_other_schema(self, module_configuration):
        view = CustomViewConfiguration(name="v", query="select * from other.t")
        assert MergeReconciler.validate_view(view, module_configuration) is not None

    def test_unknown_table_without_space_after_keyword(self, module_configuration):
        view = CustomViewConfiguration(name="v", query='select * from"s"."gone"')
        reason = MergeReconciler.validate_view(view, module_configuration)
        assert reason == "it references unknown tables: s.gone"

    def test_extract_function_does_not_reference_a_table(self, module_configuration):
        view = CustomViewConfiguration(
            name="v", query='select extract(epoch from t.created) from "s"."t"'
        )
        assert MergeReconciler.validate_view(view, module_configuration) is None

    def test_unparsable_query(self, module_configuration):
        view = CustomViewConfiguration(name="v", query='select * from "s"."t" where (')
        reason = MergeReconciler.validate_view(view, module_configuration)
        assert reason == "its query cannot be parsed"

    def test_existing_tables(self, module_configuration):
        view = CustomViewConfiguration(
            name="v", query="select * from s.t join s.customers on true"
        )
        assert MergeReconciler.validate_view(view, module_configuration) is None


class TestReconcile:
    def test_valid_view_is_added_and_views_sorted(self, module_configuration):
        module_configuration.add_custom_view("s", CustomViewConfiguration(name="z_view"))
        reconciler = MergeReconciler(
            _merge_document(
                CustomViewConfiguration(name="a_view", query='select * from "s"."t"')
            )
        )

        report = reconciler.reconcile(module_configuration)

        views = module_configuration.get_schema("s").custom_views
        assert [v.name for v in views] == ["a_view", "z_view"]
        assert report.added == [("s", "a_view")]
        assert report.dropped == []

    def test_invalid_view_is_dropped(self, module_configuration, caplog):
        reconciler = MergeReconciler(
            _merge_document(
                CustomViewConfiguration(name="stale", query="select * from s.removed")
            )
        )

        with caplog.at_level(logging.WARNING):
            report = reconciler.reconcile(module_configuration)

        assert module_configuration.get_custom_view("s", "stale") is None
        assert report.dropped[0][:2] == ("s", "stale")
        assert "Dropping merge view s.stale" in caplog.text

    def test_generated_views_are_not_replaced(self, module_configuration):
        generated = _generated_view()
        module_configuration.add_custom_view("s", generated)
        reconciler = MergeReconciler(
            _merge_document(CustomViewConfiguration(name="t__tags", query="select 2"))
        )

        reconciler.reconcile(module_configuration)

        views = module_configuration.get_schema("s").custom_views
        assert views == [generated]
        assert views[0].query == 'select id as "t_id" from "s"."t"'

    def test_schema_missing_from_merge_is_skipped(self, module_configuration):
        reconciler = MergeReconciler(
            _merge_document(
                CustomViewConfiguration(name="v", query="select * from s.t"),
                schema="elsewhere",
            )
        )

        report = reconciler.reconcile(module_configuration)

        assert report.added == []
        assert "elsewhere" not in module_configuration.schemas

    def test_empty_merge_document(self, module_configuration):
        before = module_configuration.model_copy(deep=True)
        report = MergeReconciler().reconcile(module_configuration)
        assert module_configuration == before
        assert report.added == [] and report.dropped == []
