"""
Centralized authorization dependencies.

Admin-only endpoints depend on ``RequireAdminRole``; public endpoints that still
want to know who is calling use ``OptionalUser``.
"""

from typing import Annotated, Optional

from fastapi import Depends

from charter.core.security import CurrentUser, get_current_user, get_optional_user
from charter.core.service_utils import ensure_admin_access


def require_admin_role():
    """
    Dependency that requires admin role access.

    Raises:
        AuthenticationError: If no valid token was sent
        AccessDeniedError: If the caller is not an admin
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        return ensure_admin_access(current_user)

    return dependency


RequireAdminRole = Annotated[CurrentUser, Depends(require_admin_role())]
RequireUser = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUser = Annotated[Optional[CurrentUser], Depends(get_optional_user)]
