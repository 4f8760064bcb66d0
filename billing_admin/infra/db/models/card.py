# billing_admin/infra/db/models/card.py
from sqlalchemy import Column, Integer, String, Date, ForeignKey

from billing_admin.infra.db.base import Base


class CardDetail(Base):
    __tablename__ = "card_details"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    bank_name = Column(String(100), nullable=False)
    card_type = Column(String(20), nullable=False)
    card_name = Column(String(100), nullable=False)
    # Stored formatted: groups of 4 digits separated by spaces
    card_number = Column(String(30))
    due_date = Column(Date)
