from sqlalchemy import (
    Column, String, Integer, Float, Boolean, Text, ForeignKey, JSON
)
from sqlalchemy.orm import relationship, DeclarativeBase


class Base(DeclarativeBase):
    pass


# ─── Models ──────────────────────────────────────────────────────────

class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    parent_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    icon_name = Column(String, nullable=True)
    is_bookable = Column(Boolean, nullable=False, default=False)
    price = Column(Float, nullable=True)  # NULL: not applicable, 0: free
    display_order = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, nullable=False, default=False)
    booking_config = Column(JSON, nullable=True)  # {"form_fields": [...], "document_requirements": [...]}

    # Relationships
    parent = relationship("Service", remote_side=[id], back_populates="sub_services")
    sub_services = relationship("Service", back_populates="parent")


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=False)
