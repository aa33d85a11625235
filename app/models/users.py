"""User ORM model: wallet-keyed accounts.

``wallet_address`` is stored lowercased, so identity comparisons are always
done against the lowercased form of the incoming address.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func, text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Application user identified by an Ethereum wallet address."""

    __tablename__ = "users"

    wallet_address: Mapped[str] = mapped_column(
        String(42), unique=True, nullable=False, index=True
    )
    chain_id: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default=text("1")
    )
    balance: Mapped[str] = mapped_column(
        String(100), nullable=False, default="0", server_default="0"
    )
    is_active: Mapped[bool] = mapped_column(
        default=True,
        server_default=text("true"),
        nullable=False,
    )
    last_login: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} wallet={self.wallet_address!r}>"
