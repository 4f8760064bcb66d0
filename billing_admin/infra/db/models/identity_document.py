# billing_admin/infra/db/models/identity_document.py
from sqlalchemy import Column, Integer, String, ForeignKey

from billing_admin.infra.db.base import Base


class IdentityDocument(Base):
    __tablename__ = "identity_documents"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    document_type = Column(String(20), nullable=False)
    document_number = Column(String(20))
    # Storage path handed back by the upload service
    document_image = Column(String(500))
