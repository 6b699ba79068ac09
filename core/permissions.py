"""
Role based permission classes.
"""
from rest_framework.permissions import SAFE_METHODS, BasePermission

from .models import User


def has_role(user, *roles: str) -> bool:
    return bool(user and user.is_authenticated and getattr(user, "role", None) in roles)


class IsProfessionalRole(BasePermission):
    """Allow access only to professionals."""
    message = "Not authorized"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return has_role(getattr(request, "user", None), User.ROLE_PROFESSIONAL)


class IsProfessionalOrAdmin(BasePermission):
    """Professionals and admins may publish webinars."""
    message = "Not authorized to create webinars"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return has_role(getattr(request, "user", None), User.ROLE_PROFESSIONAL, User.ROLE_ADMIN)


class ReadOnlyOrProfessionalOrAdmin(IsProfessionalOrAdmin):
    """Anyone may read; only professionals and admins may write."""

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
