"""
FastAPI dependencies shared across route groups.

Route guards read the user restored by the session auth stage; they never
touch the session store themselves.
"""

import logging
from typing import Optional

from fastapi import Depends, Request

from storefront.modules.accounts.domain.models import User
from storefront.shared.core.exceptions import AuthorizationError, LoginRequiredError

logger = logging.getLogger(__name__)

NEXT_URL_KEY = "next_url"


async def get_current_user(request: Request) -> Optional[User]:
    """Return the signed-in user, or None for anonymous visitors."""
    return getattr(request.state, "user", None)


async def require_login(
    request: Request,
    current_user: Optional[User] = Depends(get_current_user),
) -> User:
    """
    Get the signed-in user or send the visitor to the sign-in page.

    Raises:
        LoginRequiredError: If nobody is signed in
    """
    if current_user is None:
        flash = getattr(request.state, "flash", None)
        if flash is not None:
            flash.add("error", "Please sign in to continue")
        if "session" in request.scope:
            request.session[NEXT_URL_KEY] = request.url.path
        raise LoginRequiredError(next_path=request.url.path)
    return current_user


async def require_admin(current_user: User = Depends(require_login)) -> User:
    """
    Get the signed-in user with admin privileges.

    Raises:
        AuthorizationError: If the user is not an administrator
    """
    if not current_user.is_admin:
        logger.warning(f"Non-admin access attempt: {current_user.id}")
        raise AuthorizationError(
            "Admin privileges required for this page",
            resource="admin",
            user_id=str(current_user.id),
        )
    return current_user
