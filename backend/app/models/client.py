"""
Client model: a freelancer's customer, owned by exactly one user.
"""

import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base, TimestampMixin


class Client(TimestampMixin, Base):
    """Client record scoped to its owning user."""

    __tablename__ = "clients"
    __table_args__ = (
        Index("ix_clients_user_id_created_at", "user_id", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    company = Column(String(255), nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    tax_id = Column(String(50), nullable=True)  # VAT / fiscal id printed on invoices
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    user = relationship("User", back_populates="clients")

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, user_id={self.user_id}, active={self.is_active})>"
