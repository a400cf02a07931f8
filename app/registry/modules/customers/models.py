from __future__ import annotations

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.registry.models import Base


class Customer(Base):
    __tablename__ = "customers"
    # AUTOINCREMENT on SQLite so ids of deleted rows are never handed out again (Postgres uses SERIAL).
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Customer id={self.id} name={self.name!r}>"
