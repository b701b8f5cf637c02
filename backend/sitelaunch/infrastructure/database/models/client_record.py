"""SQLAlchemy ORM model for the ClientRecord entity."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sitelaunch.infrastructure.database.base import Base


class ClientRecordModel(Base):
    """ORM model, mapped to the 'clients' table."""

    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    business_name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Always stored lower-cased by the entity, so a plain unique constraint
    # enforces case-insensitive uniqueness.
    subdomain: Mapped[str] = mapped_column(String(63), nullable=False, unique=True)
    industry: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    address: Mapped[str | None] = mapped_column(String(200), nullable=True)
    about_us: Mapped[str] = mapped_column(Text, nullable=False)
    services: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    hours: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    social_links: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    template_id: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    deployment_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    site_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_clients_status", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<ClientRecordModel(id={self.id}, "
            f"subdomain='{self.subdomain}', status='{self.status}')>"
        )
