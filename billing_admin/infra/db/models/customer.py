# billing_admin/infra/db/models/customer.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func

from billing_admin.infra.db.base import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    full_name = Column(String(200), nullable=False)
    billing_address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    pin_code = Column(String(10))
    country = Column(String(100))
    email_id = Column(String(255))
    contact_no = Column(String(15))
    created_at = Column(DateTime, server_default=func.now())
