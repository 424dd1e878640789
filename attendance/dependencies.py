"""Request-scoped dependencies shared by the routers."""
from typing import Optional

from fastapi import Header


def current_user_email(x_user_email: Optional[str] = Header(None)) -> Optional[str]:
    """Email of the signed-in user, as forwarded by the session layer in front of this service.

    Override with app.dependency_overrides to plug in another identity provider.
    """
    if x_user_email and x_user_email.strip():
        return x_user_email.strip().lower()
    return None
