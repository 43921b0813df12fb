"""
Conrod recipe model

One row per finished conrod variant/size. Doubles as the bill of materials:
the pin and ball bearing columns name the pre-production components that one
assembled conrod consumes (1:1).
"""
from sqlalchemy import Column, Integer, String, Float, DateTime
from datetime import datetime

from conrodworks.db.base import Base


class Conrod(Base):
    """Conrod recipe - matches conrods table"""
    __tablename__ = "conrods"

    id = Column(Integer, primary_key=True, index=True)
    serial_number = Column(String(50), unique=True, nullable=False, index=True)  # CR001

    # Finished conrod identity (recipe lookup key)
    conrod_name = Column(String(255), nullable=False, index=True)
    conrod_variant = Column(String(100), nullable=False)  # Standard, NRB
    conrod_size = Column(String(50), nullable=False)

    # Dimensions (mm)
    small_end_diameter = Column(Float, nullable=False, default=0.0)
    big_end_diameter = Column(Float, nullable=False, default=0.0)
    center_distance = Column(Float, nullable=False, default=0.0)

    # Required components
    pin_name = Column(String(255), nullable=False)
    pin_size = Column(String(50), nullable=False)
    ball_bearing_name = Column(String(255), nullable=False)
    ball_bearing_variant = Column(String(100), nullable=False)
    ball_bearing_size = Column(String(50), nullable=False)

    amount = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Conrod {self.serial_number}: {self.conrod_name} {self.conrod_variant}/{self.conrod_size}>"
