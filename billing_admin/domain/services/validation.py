# billing_admin/domain/services/validation.py
"""
Form-level checks that run before anything is written.

Failures are collected per field and raised together as a
``ValidationFailure``; no statement is issued for an invalid form.
"""
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from billing_admin.core.errors import ValidationFailure
from billing_admin.domain.registry import TableSchema, get_table_schema
from billing_admin.domain.services.fees import apply_transaction_fees

PAN_RE = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")
GST_RE = re.compile(r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]")
AADHAAR_RE = re.compile(r"[0-9]{12}")
VOTER_ID_RE = re.compile(r"[A-Z]{3}[0-9]{7}")
CARD_NUMBER_RE = re.compile(r"[0-9]{13,19}")

# Transaction fields the derived fees are computed from
FEE_INPUTS = ("transaction_type", "amount", "pos_type", "tax_rate")

DOCUMENT_RULES = {
    "Aadhaar Card": (AADHAAR_RE, "Aadhaar number must be 12 digits"),
    "PAN Card": (PAN_RE, "Invalid PAN number format (e.g., ABCDE1234F)"),
    "Voter ID": (VOTER_ID_RE, "Invalid Voter ID format (e.g., ABC1234567)"),
}

# Card products per (bank, card type)
CARD_CATALOG: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("State Bank of India", "Credit Card"): ("SBI SimplySAVE Credit Card", "SBI SimplyCLICK Credit Card"),
    ("State Bank of India", "Debit Card"): ("SBI Classic Debit Card", "SBI Global Debit Card"),
    ("HDFC Bank", "Credit Card"): ("HDFC Moneyback Credit Card", "HDFC Regalia Credit Card"),
    ("HDFC Bank", "Debit Card"): ("HDFC Premium Debit Card", "HDFC International Debit Card"),
    ("ICICI Bank", "Credit Card"): ("ICICI Coral Credit Card", "ICICI Platinum Credit Card"),
    ("ICICI Bank", "Debit Card"): ("ICICI Coral Debit Card", "ICICI Sapphiro Debit Card"),
    ("Axis Bank", "Credit Card"): ("Axis Neo Credit Card", "Axis Magnus Credit Card"),
    ("Axis Bank", "Debit Card"): ("Axis Visa Platinum Debit Card", "Axis RuPay Platinum Debit Card"),
    ("Kotak Mahindra Bank", "Credit Card"): ("Kotak Royale Credit Card", "Kotak Urbane Credit Card"),
    ("Kotak Mahindra Bank", "Debit Card"): ("Kotak Classic Debit Card", "Kotak Premium Debit Card"),
}


def validate_pan(pan: Optional[str]) -> bool:
    return isinstance(pan, str) and PAN_RE.fullmatch(pan) is not None


def validate_gst(gst: Optional[str]) -> bool:
    return isinstance(gst, str) and GST_RE.fullmatch(gst) is not None


def pan_in_gst(pan: str, gst: str) -> bool:
    """GST characters 3-12 carry the holder's PAN."""
    return gst[2:12] == pan


def validate_document_number(document_type: str, number: str) -> Optional[str]:
    rule = DOCUMENT_RULES.get(document_type)
    if rule is None:
        return None
    pattern, message = rule
    return None if pattern.fullmatch(number) else message


def normalize_card_number(raw: Any) -> str:
    return re.sub(r"[^0-9]", "", str(raw or ""))


def format_card_number(digits: str) -> str:
    return " ".join(digits[i:i + 4] for i in range(0, len(digits), 4))


def card_names_for(bank_name: Optional[str], card_type: Optional[str]) -> List[str]:
    if not isinstance(bank_name, str) or not isinstance(card_type, str):
        return []
    return list(CARD_CATALOG.get((bank_name, card_type), ()))


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def check_text(values: Dict[str, Any], names: Tuple[str, ...], prefix: str = "") -> Dict[str, str]:
    """Fields that must arrive as JSON strings before any pattern or catalogue lookup."""
    return {
        prefix + name: f"{name} must be a string"
        for name in names
        if values.get(name) is not None and not isinstance(values[name], str)
    }


def check_required(
    schema: TableSchema,
    values: Dict[str, Any],
    *,
    partial: bool = False,
    skip: Tuple[str, ...] = (),
    prefix: str = "",
) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for spec in schema.fields:
        if not spec.required or spec.name in skip:
            continue
        if partial and spec.name not in values:
            continue
        if _blank(values.get(spec.name)):
            errors[prefix + spec.name] = f"{spec.label} is required"
    return errors


def check_enums(schema: TableSchema, values: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for spec in schema.fields:
        if spec.type != "enum" or _blank(values.get(spec.name)):
            continue
        if values[spec.name] not in spec.enum_values:
            errors[prefix + spec.name] = f"{spec.label} must be one of: {', '.join(spec.enum_values)}"
    return errors


def _check_tax_detail(values: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    errors = check_text(values, ("pan_no", "gst_no"), prefix)
    if errors:
        return errors
    pan = values.get("pan_no")
    gst = values.get("gst_no")
    if pan and not validate_pan(pan):
        errors[prefix + "pan_no"] = "Invalid PAN number format. Format should be: AAAAA1234A"
    if gst and not validate_gst(gst):
        errors[prefix + "gst_no"] = "Invalid GST number format. Format should be: 22AAAAA1234A1Z5"
    if pan and gst and not pan_in_gst(pan, gst):
        errors[prefix + "gst_no"] = "PAN number in GST does not match with provided PAN"
    return errors


def _check_identity_document(values: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    errors = check_text(values, ("document_type", "document_number"), prefix)
    if errors:
        return errors
    document_type = values.get("document_type")
    number = values.get("document_number")
    if not document_type or _blank(number):
        return {}
    message = validate_document_number(document_type, number)
    return {prefix + "document_number": message} if message else {}


def _check_account(values: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for name, label in (("opening_balance", "Opening Balance"), ("credit_limit", "Credit Limit")):
        value = values.get(name)
        if _blank(value):
            continue
        try:
            float(value)
        except (TypeError, ValueError):
            errors[prefix + name] = f"{label} must be a number"
    return errors


def _prepare_card(values: Dict[str, Any], errors: Dict[str, str]) -> Dict[str, Any]:
    type_errors = check_text(values, ("bank_name", "card_type", "card_name", "card_number"))
    if type_errors:
        errors.update(type_errors)
        return values

    if "card_number" in values:
        digits = normalize_card_number(values.get("card_number"))
        if not CARD_NUMBER_RE.fullmatch(digits):
            errors["card_number"] = "Card number must be between 13 and 19 digits"
        else:
            values["card_number"] = format_card_number(digits)

    bank, card_type, card_name = values.get("bank_name"), values.get("card_type"), values.get("card_name")
    if bank and card_type and card_name and "card_name" not in errors:
        names = card_names_for(bank, card_type)
        if card_name not in names:
            errors["card_name"] = f"{card_name} is not offered as a {card_type} by {bank}"
    return values


def _prepare_transaction(
    values: Dict[str, Any],
    errors: Dict[str, str],
    partial: bool,
    current: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    if current and any(key in values for key in FEE_INPUTS):
        # Fees are derived from the whole record, not just the edited fields
        for key in FEE_INPUTS:
            values.setdefault(key, current.get(key))
    if values.get("transaction_type") == "credit":
        # POS channel and fee fields only apply to debits
        errors.pop("pos_type", None)
    if values.get("transaction_type") == "debit" and _blank(values.get("tax_rate")):
        errors["tax_rate"] = "Tax Rate is required"
    if not partial and _blank(values.get("transaction_date")):
        values["transaction_date"] = datetime.now(timezone.utc).isoformat()
    if errors or "transaction_type" not in values:
        return values
    try:
        return apply_transaction_fees(values)
    except ValidationFailure as e:
        errors.update(e.fields)
        return values


def prepare_form(
    table: str,
    values: Dict[str, Any],
    *,
    partial: bool = False,
    current: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Validate a form for ``table`` and return the values to submit.

    ``partial`` is used for edits: required fields are only checked when
    present in the submitted values. ``current`` is the stored row being
    edited; a transaction edit touching any fee input is completed from it
    so tax, mdr, charges and profit are recomputed for the merged record.
    """
    schema = get_table_schema(table)
    if schema is None:
        return dict(values)

    prepared = dict(values)
    errors = check_required(schema, prepared, partial=partial)
    errors.update(check_enums(schema, prepared))

    if table == "customer_tax_details":
        errors.update(_check_tax_detail(prepared))
    elif table == "identity_documents":
        errors.update(_check_identity_document(prepared))
    elif table == "accounts":
        errors.update(_check_account(prepared))
    elif table == "card_details":
        prepared = _prepare_card(prepared, errors)
    elif table == "transactions":
        prepared = _prepare_transaction(prepared, errors, partial, current)

    if errors:
        raise ValidationFailure(errors)
    return prepared


def validate_onboarding(
    customer: Dict[str, Any],
    tax: Optional[Dict[str, Any]] = None,
    document: Optional[Dict[str, Any]] = None,
    account: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Checks the combined customer form. Optional sections are only validated
    when at least one of their fields is filled; ``customer_id`` is assigned
    on insert so it is never required here.
    """
    errors = check_required(get_table_schema("customers"), customer)

    if tax and any(not _blank(v) for v in tax.values()):
        schema = get_table_schema("customer_tax_details")
        errors.update(check_required(schema, tax, skip=("customer_id",), prefix="tax_"))
        errors.update(check_enums(schema, tax, prefix="tax_"))
        errors.update(_check_tax_detail(tax, prefix="tax_"))

    if document and any(not _blank(v) for v in document.values()):
        schema = get_table_schema("identity_documents")
        errors.update(check_required(schema, document, skip=("customer_id",), prefix="doc_"))
        errors.update(check_enums(schema, document, prefix="doc_"))
        errors.update(_check_identity_document(document, prefix="doc_"))

    if account and any(not _blank(v) for v in account.values()):
        schema = get_table_schema("accounts")
        errors.update(check_required(schema, account, skip=("customer_id",), prefix="account_"))
        errors.update(_check_account(account, prefix="account_"))

    if errors:
        raise ValidationFailure(errors)
