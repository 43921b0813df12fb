"""
Customer model
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime

from conrodworks.db.base import Base


class Customer(Base):
    """Billing customer - matches customers table"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    address = Column(Text, nullable=False)
    phone_number = Column(String(50), nullable=True)
    gst_no = Column(String(50), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    invoices = relationship("Invoice", back_populates="customer")

    def __repr__(self):
        return f"<Customer {self.id}: {self.name}>"
