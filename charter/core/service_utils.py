"""
Guards shared by the service layer.

Each helper either returns its (possibly cleaned) input or raises the domain
exception the HTTP layer maps to a status code, so services read as a straight
line of checks.
"""

from typing import TYPE_CHECKING, Any, Optional, TypeVar

from charter.core.exceptions import (
    AccessDeniedError,
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)
from charter.models.user import AppRole

if TYPE_CHECKING:
    from charter.core.security import CurrentUser

T = TypeVar("T")


def ensure_exists(
    entity: Optional[T],
    entity_name: str,
    entity_id: Optional[int] = None,
    field_name: Optional[str] = None,
) -> T:
    """
    Return ``entity`` or raise EntityNotFoundError (404).

    Args:
        entity: Result of a lookup, None when nothing matched
        entity_name: Label used in the error, e.g. "Yacht" or "Cart item"
        entity_id: Id that was looked up
        field_name: Lookup field when it was not the primary key
    """
    if entity is None:
        raise EntityNotFoundError(entity_name, entity_id, field_name)
    return entity


def ensure_sellable(entity: Optional[T], entity_name: str, entity_id: int) -> T:
    """Like ``ensure_exists``, but a deactivated catalog row counts as missing too."""
    if entity is not None and not entity.is_active:
        entity = None
    return ensure_exists(entity, entity_name, entity_id)


def ensure_admin_access(user: "CurrentUser") -> "CurrentUser":
    """Raise AccessDeniedError (403) unless ``user`` holds the admin role."""
    if AppRole.ADMIN not in user.roles:
        held = ", ".join(sorted(role.value for role in user.roles)) or None
        raise AccessDeniedError(AppRole.ADMIN.value, held)
    return user


def validate_non_empty_string(value: Optional[str], field_name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(
            f"{field_name} cannot be empty", field_name, value, key="field_empty"
        )
    return value.strip()


def validate_date_range(
    start_date: Any,
    end_date: Any,
    start_field: str = "start_date",
    end_field: str = "end_date",
) -> None:
    """
    Require ``end_date`` strictly after ``start_date``.

    Works for dates and datetimes alike; used by the admin booking form and the
    shopping list date picker.
    """
    if not end_date > start_date:
        raise ValidationError(
            f"{end_field} must be after {start_field}",
            end_field,
            f"{end_date} (start: {start_date})",
            key="date_range",
        )


def ensure_no_related_records(count: int, entity_name: str, related_entity: str) -> None:
    """Refuse to delete a row that other rows still point at (409)."""
    if count:
        raise ConflictError(
            f"{entity_name} still has {count} {related_entity}; remove them first",
            related_entity,
            key="still_referenced",
            params={"count": count},
        )
