import uuid

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import UUID

from trubalance.infrastructure.db.base import Base


class InvoiceCounter(Base):
    """Last issued invoice sequence per (user, financial year)."""
    __tablename__ = "invoice_counters"
    __table_args__ = (
        UniqueConstraint("user_id", "financial_year", name="uq_invoice_counters_user_fy"),
    )
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(64), nullable=False, index=True)
    financial_year = Column(Integer, nullable=False)
    last_sequence = Column(Integer, nullable=False, default=0)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
    )
