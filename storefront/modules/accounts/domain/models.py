# 📄 File: storefront/modules/accounts/domain/models.py
# 🧭 Purpose (Layman Explanation):
# Describes a shop account: who the person is and whether they may use the admin area.
# 🧪 Purpose (Technical Summary):
# Immutable User entity restored into request state by the session auth stage.
# 🔄 Connected Modules / Calls From:
# User repositories, authentication middleware, user and admin routes

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(frozen=True)
class User:
    """A registered storefront user."""
    username: str
    email: str
    password_hash: str = field(repr=False)
    is_admin: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
