# billing_admin/infra/db/models/transaction.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, func

from billing_admin.infra.db.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)

    # Card reference (free text, not a FK)
    card_name = Column(String(100))
    card_number = Column(String(30))

    transaction_type = Column(String(10), nullable=False)  # credit / debit
    amount = Column(Numeric(14, 2), nullable=False)

    # --- Fees (debit only)
    pos_type = Column(String(5))
    tax_rate = Column(Numeric(10, 2))
    tax = Column(Numeric(14, 2))
    mdr = Column(Numeric(14, 2))
    charges = Column(Numeric(14, 2))
    profit = Column(Numeric(14, 2))

    transaction_date = Column(DateTime, server_default=func.now(), index=True)
