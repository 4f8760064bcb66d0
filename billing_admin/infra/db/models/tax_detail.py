# billing_admin/infra/db/models/tax_detail.py
from sqlalchemy import Column, Integer, String, ForeignKey

from billing_admin.infra.db.base import Base


class CustomerTaxDetail(Base):
    __tablename__ = "customer_tax_details"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    pan_no = Column(String(10), nullable=False)
    gst_no = Column(String(15), nullable=False)
    gst_type = Column(String(20), nullable=False)
