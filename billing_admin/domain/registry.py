# billing_admin/domain/registry.py
"""
Declarative table registry.

Every table the generic API may touch is listed here, together with the
fields a client may write. Anything not in this registry never reaches SQL
as an identifier.
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from sqlalchemy import Table

from billing_admin.core.errors import TableNotAllowed
from billing_admin.infra.db.base import Base
import billing_admin.infra.db.models  # noqa: F401  (populates Base.metadata)


@dataclass(frozen=True)
class Relation:
    table: str
    value_field: str
    label_field: str


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    type: str  # text | textarea | number | boolean | datetime | date | enum | select
    required: bool = False
    enum_values: Tuple[str, ...] = ()
    relation: Optional[Relation] = None


@dataclass(frozen=True)
class ListColumn:
    key: str
    label: str
    sortable: bool = False


@dataclass(frozen=True)
class TableSchema:
    table: str
    title: str
    fields: Tuple[FieldSpec, ...]
    list_columns: Tuple[ListColumn, ...] = field(default=())

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> Optional[FieldSpec]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


CUSTOMER_REL = Relation(table="customers", value_field="id", label_field="full_name")
ACCOUNT_REL = Relation(table="accounts", value_field="id", label_field="id")

GST_TYPES = ("Regular", "Composition", "Casual", "Non-Resident", "UN Body", "SEZ")
DOCUMENT_TYPES = ("Aadhaar Card", "PAN Card", "Voter ID")
CARD_TYPES = ("Credit Card", "Debit Card")
TRANSACTION_TYPES = ("credit", "debit")
POS_TYPES = ("MP", "MOS", "INJ")
CREDIT_TYPES = ("credit_given", "repayment")

BANK_NAMES = (
    "State Bank of India",
    "HDFC Bank",
    "ICICI Bank",
    "Punjab National Bank",
    "Bank of Baroda",
    "Canara Bank",
    "Union Bank of India",
    "Axis Bank",
    "Kotak Mahindra Bank",
    "IndusInd Bank",
    "Yes Bank",
    "Federal Bank",
    "IDBI Bank",
    "RBL Bank",
)

CARD_NAMES = (
    # Credit
    "SBI SimplySAVE Credit Card",
    "SBI SimplyCLICK Credit Card",
    "HDFC Moneyback Credit Card",
    "HDFC Regalia Credit Card",
    "ICICI Coral Credit Card",
    "ICICI Platinum Credit Card",
    "Axis Neo Credit Card",
    "Axis Magnus Credit Card",
    "Kotak Royale Credit Card",
    "Kotak Urbane Credit Card",
    # Debit
    "SBI Classic Debit Card",
    "SBI Global Debit Card",
    "HDFC Premium Debit Card",
    "HDFC International Debit Card",
    "ICICI Coral Debit Card",
    "ICICI Sapphiro Debit Card",
    "Axis Visa Platinum Debit Card",
    "Axis RuPay Platinum Debit Card",
    "Kotak Classic Debit Card",
    "Kotak Premium Debit Card",
)


SCHEMAS: Dict[str, TableSchema] = {
    "customers": TableSchema(
        table="customers",
        title="Customers",
        fields=(
            FieldSpec("full_name", "Full Name", "text", required=True),
            FieldSpec("billing_address", "Billing Address", "textarea"),
            FieldSpec("city", "City", "text"),
            FieldSpec("state", "State", "text"),
            FieldSpec("pin_code", "PIN Code", "text"),
            FieldSpec("country", "Country", "text"),
            FieldSpec("email_id", "Email", "text"),
            FieldSpec("contact_no", "Contact No", "text"),
            FieldSpec("created_at", "Created At", "datetime"),
        ),
        list_columns=(
            ListColumn("full_name", "Full Name", sortable=True),
            ListColumn("email_id", "Email", sortable=True),
            ListColumn("contact_no", "Contact"),
            ListColumn("city", "City"),
            ListColumn("created_at", "Created"),
        ),
    ),
    "customer_tax_details": TableSchema(
        table="customer_tax_details",
        title="Customer Tax Details",
        fields=(
            FieldSpec("customer_id", "Customer", "select", required=True, relation=CUSTOMER_REL),
            FieldSpec("pan_no", "PAN No", "text", required=True),
            FieldSpec("gst_no", "GST No", "text", required=True),
            FieldSpec("gst_type", "GST Type", "enum", required=True, enum_values=GST_TYPES),
        ),
        list_columns=(
            ListColumn("customer_id", "Customer"),
            ListColumn("pan_no", "PAN"),
            ListColumn("gst_no", "GST"),
            ListColumn("gst_type", "GST Type"),
        ),
    ),
    "card_details": TableSchema(
        table="card_details",
        title="Card Details",
        fields=(
            FieldSpec("customer_id", "Customer", "select", required=True, relation=CUSTOMER_REL),
            FieldSpec("bank_name", "Bank Name", "enum", required=True, enum_values=BANK_NAMES),
            FieldSpec("card_type", "Card Type", "enum", required=True, enum_values=CARD_TYPES),
            FieldSpec("card_name", "Card Name", "enum", required=True, enum_values=CARD_NAMES),
            FieldSpec("card_number", "Card Number", "text", required=True),
            FieldSpec("due_date", "Due Date", "date"),
        ),
        list_columns=(
            ListColumn("customer_id", "Customer"),
            ListColumn("bank_name", "Bank"),
            ListColumn("card_type", "Type"),
            ListColumn("card_name", "Name on Card"),
            ListColumn("card_number", "Card Number"),
        ),
    ),
    "identity_documents": TableSchema(
        table="identity_documents",
        title="Identity Documents",
        fields=(
            FieldSpec("customer_id", "Customer", "select", required=True, relation=CUSTOMER_REL),
            FieldSpec("document_type", "Type", "enum", required=True, enum_values=DOCUMENT_TYPES),
            FieldSpec("document_number", "Number", "text"),
            FieldSpec("document_image", "Image URL", "text"),
        ),
        list_columns=(
            ListColumn("customer_id", "Customer"),
            ListColumn("document_type", "Type"),
            ListColumn("document_number", "Number"),
        ),
    ),
    "accounts": TableSchema(
        table="accounts",
        title="Accounts",
        fields=(
            FieldSpec("customer_id", "Customer", "select", required=True, relation=CUSTOMER_REL),
            FieldSpec("opening_balance", "Opening Balance", "number"),
            FieldSpec("credit_allowed", "Credit Allowed", "boolean"),
            FieldSpec("credit_limit", "Credit Limit", "number"),
            FieldSpec("price_category", "Price Category", "text"),
            FieldSpec("remark", "Remark", "textarea"),
            FieldSpec("received", "Received", "number"),
            FieldSpec("pending_amount", "Pending Amount", "number"),
        ),
        list_columns=(
            ListColumn("customer_id", "Customer"),
            ListColumn("opening_balance", "Opening"),
            ListColumn("credit_allowed", "Credit Allowed"),
            ListColumn("pending_amount", "Pending"),
        ),
    ),
    "transactions": TableSchema(
        table="transactions",
        title="Transactions",
        fields=(
            FieldSpec("customer_id", "Customer", "select", required=True, relation=CUSTOMER_REL),
            FieldSpec("account_id", "Account", "select", required=True, relation=ACCOUNT_REL),
            FieldSpec("card_name", "Card Name", "text"),
            FieldSpec("card_number", "Card Number", "text"),
            FieldSpec("transaction_type", "Type", "enum", required=True, enum_values=TRANSACTION_TYPES),
            FieldSpec("amount", "Amount", "number", required=True),
            FieldSpec("pos_type", "POS Type", "enum", required=True, enum_values=POS_TYPES),
            FieldSpec("tax_rate", "Tax Rate (%)", "number"),
            FieldSpec("tax", "Tax", "number"),
            FieldSpec("charges", "Charges", "number"),
            FieldSpec("mdr", "MDR", "number"),
            FieldSpec("profit", "Profit", "number"),
            FieldSpec("transaction_date", "Transaction Date", "datetime"),
        ),
        list_columns=(
            ListColumn("transaction_date", "Date", sortable=True),
            ListColumn("customer_id", "Customer"),
            ListColumn("transaction_type", "Type"),
            ListColumn("amount", "Amount", sortable=True),
            ListColumn("pos_type", "POS Type"),
            ListColumn("tax", "Tax (₹)", sortable=True),
            ListColumn("mdr", "MDR (₹)", sortable=True),
            ListColumn("charges", "Charges (₹)", sortable=True),
            ListColumn("profit", "Profit (₹)", sortable=True),
        ),
    ),
    "customer_credits": TableSchema(
        table="customer_credits",
        title="Customer Credits",
        fields=(
            FieldSpec("customer_id", "Customer", "select", required=True, relation=CUSTOMER_REL),
            FieldSpec("account_id", "Account", "select", required=True, relation=ACCOUNT_REL),
            FieldSpec("type", "Type", "enum", required=True, enum_values=CREDIT_TYPES),
            FieldSpec("amount", "Amount", "number", required=True),
            FieldSpec("date", "Date", "datetime"),
            FieldSpec("note", "Note", "textarea"),
        ),
        list_columns=(
            ListColumn("date", "Date", sortable=True),
            ListColumn("customer_id", "Customer"),
            ListColumn("type", "Type"),
            ListColumn("amount", "Amount", sortable=True),
        ),
    ),
    "payment_alerts": TableSchema(
        table="payment_alerts",
        title="Payment Alerts",
        fields=(
            FieldSpec("customer_id", "Customer", "select", required=True, relation=CUSTOMER_REL),
            FieldSpec("account_id", "Account", "select", required=True, relation=ACCOUNT_REL),
            FieldSpec("alert_message", "Message", "textarea"),
            FieldSpec("due_date", "Due Date", "datetime"),
            FieldSpec("is_paid", "Is Paid", "boolean"),
        ),
        list_columns=(
            ListColumn("due_date", "Due", sortable=True),
            ListColumn("customer_id", "Customer"),
            ListColumn("alert_message", "Message"),
            ListColumn("is_paid", "Paid?"),
        ),
    ),
}

ALLOWED_TABLES: FrozenSet[str] = frozenset(s.table for s in SCHEMAS.values())


def get_table_schema(table: str) -> Optional[TableSchema]:
    for schema in SCHEMAS.values():
        if schema.table == table:
            return schema
    return None


def allowed_fields(table: str) -> List[str]:
    schema = get_table_schema(table)
    return schema.field_names if schema else []


def resolve_table(table: str) -> Table:
    """Map an allow-listed name to its Table; anything else is rejected."""
    if table not in ALLOWED_TABLES:
        raise TableNotAllowed()
    return Base.metadata.tables[table]
