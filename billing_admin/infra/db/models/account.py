# billing_admin/infra/db/models/account.py
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, ForeignKey

from billing_admin.infra.db.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    opening_balance = Column(Numeric(14, 2), default=0)
    credit_allowed = Column(Boolean, default=False)
    credit_limit = Column(Numeric(14, 2), default=0)
    price_category = Column(String(50))
    remark = Column(Text)
    # Running balances, moved by billing outside this service
    received = Column(Numeric(14, 2), default=0)
    pending_amount = Column(Numeric(14, 2), default=0)
