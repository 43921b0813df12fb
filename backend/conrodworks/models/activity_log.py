"""
Activity Log Model

Audit trail for stock, assembly and billing actions. Rows are written in
the same transaction as the change they describe.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from datetime import datetime

from conrodworks.db.base import Base

# Actions
ACTION_CREATE = "CREATE"
ACTION_UPDATE = "UPDATE"
ACTION_DELETE = "DELETE"
ACTION_DEDUCT = "DEDUCT"
ACTIONS = (ACTION_CREATE, ACTION_UPDATE, ACTION_DELETE, ACTION_DEDUCT)

# Modules
MODULE_PRE_PRODUCTION = "pre-production"
MODULE_CONROD_ASSEMBLY = "conrod-assembly"
MODULE_BILLING = "billing"
MODULES = (MODULE_PRE_PRODUCTION, MODULE_CONROD_ASSEMBLY, MODULE_BILLING)


class ActivityLog(Base):
    """Activity Log - one audit entry"""
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)

    action = Column(String(20), nullable=False, index=True)
    module = Column(String(50), nullable=False, index=True)

    # Subject of the action; not a foreign key since subjects can be deleted
    entity_id = Column(Integer, nullable=True)
    entity_name = Column(String(255), nullable=True)

    description = Column(String(500), nullable=False)  # Short description
    details = Column(Text, nullable=True)  # Detailed description

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<ActivityLog {self.action} {self.module}: {self.entity_name}>"
