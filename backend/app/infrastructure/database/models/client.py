"""SQLAlchemy ORM model for the Client entity."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class ClientModel(Base):
    """ORM model — maps to the 'clients' table.

    Audit columns have no ORM-side defaults: the lifecycle service is the
    only writer of ``created_at``, ``last_modified_at`` and ``deleted``.
    """

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(String(200), nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_modified_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (
        Index("ix_clients_name", "name"),
        Index("ix_clients_deleted", "deleted"),
        Index("ix_clients_name_deleted", "name", "deleted"),
    )

    def __repr__(self) -> str:
        return f"<ClientModel(id={self.id}, name='{self.name}', deleted={self.deleted})>"
