# 📄 File: storefront/modules/accounts/infrastructure/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how user accounts are stored in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the `users` table.
#
# 🔄 Connected Modules / Calls From:
# - repositories.py, migrations/versions/001_initial_tables.py

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from storefront.shared.config.database import DatabaseBase


class UserModel(DatabaseBase):
    """
    SQLAlchemy model for user accounts.
    """
    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    username: Mapped[str] = mapped_column(String(80), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email='{self.email}')>"
