# tests/test_registry.py
import pytest

from billing_admin.core.errors import TableNotAllowed
from billing_admin.domain.registry import (
    ALLOWED_TABLES,
    SCHEMAS,
    allowed_fields,
    get_table_schema,
    resolve_table,
)


def test_allowed_tables_match_registry():
    assert ALLOWED_TABLES == {
        "customers",
        "customer_tax_details",
        "card_details",
        "identity_documents",
        "accounts",
        "transactions",
        "customer_credits",
        "payment_alerts",
    }


def test_every_field_is_a_column():
    for schema in SCHEMAS.values():
        table = resolve_table(schema.table)
        for name in schema.field_names:
            assert name in table.c, f"{schema.table}.{name}"


def test_relations_point_at_allowed_tables():
    for schema in SCHEMAS.values():
        for f in schema.fields:
            if f.relation:
                assert f.relation.table in ALLOWED_TABLES
                target = resolve_table(f.relation.table)
                assert f.relation.value_field in target.c
                assert f.relation.label_field in target.c


def test_unknown_and_miscased_tables_are_rejected():
    for name in ("users", "Customers", "customers;drop table customers", ""):
        with pytest.raises(TableNotAllowed):
            resolve_table(name)
    assert get_table_schema("users") is None
    assert allowed_fields("users") == []


def test_allowed_fields_keep_registry_order():
    assert allowed_fields("customer_tax_details") == ["customer_id", "pan_no", "gst_no", "gst_type"]
