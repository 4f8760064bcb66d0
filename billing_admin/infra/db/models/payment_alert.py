# billing_admin/infra/db/models/payment_alert.py
from sqlalchemy import Column, Integer, Text, DateTime, Boolean, ForeignKey

from billing_admin.infra.db.base import Base


class PaymentAlert(Base):
    __tablename__ = "payment_alerts"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    alert_message = Column(Text)
    due_date = Column(DateTime)
    is_paid = Column(Boolean, default=False)
