# billing_admin/infra/db/models/customer_credit.py
from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, ForeignKey, func

from billing_admin.infra.db.base import Base


class CustomerCredit(Base):
    __tablename__ = "customer_credits"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    type = Column(String(20), nullable=False)  # credit_given / repayment
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(DateTime, server_default=func.now())
    note = Column(Text)
