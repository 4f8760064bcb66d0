from billing_admin.infra.db.models.customer import Customer
from billing_admin.infra.db.models.tax_detail import CustomerTaxDetail
from billing_admin.infra.db.models.identity_document import IdentityDocument
from billing_admin.infra.db.models.account import Account
from billing_admin.infra.db.models.card import CardDetail
from billing_admin.infra.db.models.transaction import Transaction
from billing_admin.infra.db.models.customer_credit import CustomerCredit
from billing_admin.infra.db.models.payment_alert import PaymentAlert

__all__ = [
    "Customer",
    "CustomerTaxDetail",
    "IdentityDocument",
    "Account",
    "CardDetail",
    "Transaction",
    "CustomerCredit",
    "PaymentAlert",
]
