# tests/test_validation.py
from decimal import Decimal

import pytest

from billing_admin.core.errors import ValidationFailure
from billing_admin.domain.services.validation import (
    card_names_for,
    format_card_number,
    normalize_card_number,
    pan_in_gst,
    prepare_form,
    validate_document_number,
    validate_gst,
    validate_onboarding,
    validate_pan,
)


def test_pan_and_gst_formats():
    assert validate_pan("ABCDE1234F")
    assert not validate_pan("ABCD1234F")
    assert not validate_pan("abcde1234f")
    assert validate_gst("22ABCDE1234F1Z5")
    assert not validate_gst("22ABCDE1234F0Z5")
    assert not validate_gst("22ABCDE1234F1X5")


def test_pan_embedded_in_gst():
    assert pan_in_gst("ABCDE1234F", "22ABCDE1234F1Z5")
    assert not pan_in_gst("ABCDE1234F", "22ABCDE9999F1Z5")


def test_document_numbers():
    assert validate_document_number("Aadhaar Card", "123412341234") is None
    assert validate_document_number("Aadhaar Card", "1234") == "Aadhaar number must be 12 digits"
    assert validate_document_number("PAN Card", "ABCDE1234F") is None
    assert validate_document_number("Voter ID", "ABC1234567") is None
    assert validate_document_number("Voter ID", "AB12345678") is not None


def test_card_number_normalisation():
    assert normalize_card_number("4111-1111 1111-1111") == "4111111111111111"
    assert format_card_number("4111111111111111") == "4111 1111 1111 1111"
    assert format_card_number("4111111111111") == "4111 1111 1111 1"


def test_card_catalog_covers_sbi():
    assert card_names_for("State Bank of India", "Credit Card") == [
        "SBI SimplySAVE Credit Card",
        "SBI SimplyCLICK Credit Card",
    ]
    assert card_names_for("Yes Bank", "Debit Card") == []
    assert card_names_for(None, "Debit Card") == []


def test_tax_form_rejects_mismatched_pan():
    with pytest.raises(ValidationFailure) as exc:
        prepare_form(
            "customer_tax_details",
            {"customer_id": 1, "pan_no": "ABCDE1234F", "gst_no": "22ABCDE9999F1Z5", "gst_type": "Regular"},
        )
    assert exc.value.fields == {"gst_no": "PAN number in GST does not match with provided PAN"}


def test_tax_form_reports_required_and_enum():
    with pytest.raises(ValidationFailure) as exc:
        prepare_form("customer_tax_details", {"customer_id": 1, "gst_type": "Other"})
    assert set(exc.value.fields) == {"pan_no", "gst_no", "gst_type"}


def test_card_form_formats_number():
    values = prepare_form(
        "card_details",
        {
            "customer_id": 1,
            "bank_name": "HDFC Bank",
            "card_type": "Credit Card",
            "card_name": "HDFC Regalia Credit Card",
            "card_number": "4111-1111-1111-1111",
        },
    )
    assert values["card_number"] == "4111 1111 1111 1111"


def test_card_form_rejects_wrong_bank_product():
    with pytest.raises(ValidationFailure) as exc:
        prepare_form(
            "card_details",
            {
                "customer_id": 1,
                "bank_name": "Axis Bank",
                "card_type": "Debit Card",
                "card_name": "HDFC Regalia Credit Card",
                "card_number": "12",
            },
        )
    assert set(exc.value.fields) == {"card_name", "card_number"}


def test_partial_edit_only_checks_submitted_fields():
    assert prepare_form("customers", {"city": "Nagpur"}, partial=True) == {"city": "Nagpur"}
    with pytest.raises(ValidationFailure):
        prepare_form("customers", {"full_name": " "}, partial=True)


def test_transaction_form_credit_skips_pos():
    values = prepare_form(
        "transactions",
        {"customer_id": 1, "account_id": 1, "transaction_type": "credit", "amount": 500},
    )
    assert values["pos_type"] is None
    assert values["tax"] is None
    assert values["transaction_date"]


def test_transaction_form_debit_requires_tax_rate():
    with pytest.raises(ValidationFailure) as exc:
        prepare_form(
            "transactions",
            {"customer_id": 1, "account_id": 1, "transaction_type": "debit", "amount": 500, "pos_type": "MP"},
        )
    assert "tax_rate" in exc.value.fields


def test_onboarding_only_checks_filled_sections():
    validate_onboarding({"full_name": "Ravi"}, tax={"pan_no": "", "gst_no": ""}, document={})

    with pytest.raises(ValidationFailure) as exc:
        validate_onboarding(
            {"full_name": ""},
            document={"document_type": "Aadhaar Card", "document_number": "12"},
            account={"opening_balance": "lots"},
        )
    assert set(exc.value.fields) == {"full_name", "doc_document_number", "account_opening_balance"}


def test_formats_reject_trailing_newline():
    assert not validate_pan("ABCDE1234F\n")
    assert not validate_gst("22ABCDE1234F1Z5\n")
    assert validate_document_number("Voter ID", "ABC1234567\n") is not None


def test_formats_reject_non_ascii_digits():
    arabic_indic = "١٢٣٤٥٦٧٨٩٠١٢"
    assert validate_document_number("Aadhaar Card", arabic_indic) == "Aadhaar number must be 12 digits"
    assert normalize_card_number("٤١١١" * 4) == ""
    assert normalize_card_number("4111 ١ 1111") == "41111111"


def test_non_string_values_are_field_errors():
    assert not validate_pan(12345)
    assert card_names_for(["HDFC Bank"], "Credit Card") == []

    with pytest.raises(ValidationFailure) as exc:
        prepare_form("customer_tax_details", {"customer_id": 1, "pan_no": 12345, "gst_no": 1, "gst_type": "Regular"})
    assert set(exc.value.fields) == {"pan_no", "gst_no"}

    with pytest.raises(ValidationFailure) as exc:
        validate_onboarding({"full_name": "Ravi"}, document={"document_type": ["PAN Card"], "document_number": "X"})
    assert "doc_document_type" in exc.value.fields


def test_transaction_edit_is_completed_from_stored_row():
    stored = {
        "transaction_type": "debit",
        "amount": "4000",
        "pos_type": "MP",
        "tax_rate": "3.50",
    }
    values = prepare_form("transactions", {"amount": 1000}, partial=True, current=stored)
    assert values["tax"] == Decimal("35.00")
    assert values["mdr"] == Decimal("15.00")
    assert values["charges"] == Decimal("15.00")
    assert values["profit"] == Decimal("20.00")

    # Edits that leave every fee input alone are not touched
    edit = {"card_name": "HDFC Regalia Credit Card"}
    assert prepare_form("transactions", edit, partial=True, current=stored) == edit
