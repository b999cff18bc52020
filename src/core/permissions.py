"""Ownership permission shared by the resource viewsets."""

from rest_framework import permissions


class IsOwnerOrReadOnly(permissions.BasePermission):
    """Reads are public; writes need an authenticated user who owns the object.

    The owning user is resolved by the view's ``owner_of(obj)`` hook so each
    resource decides what "own" means (the user itself, an article's author, ...).
    """

    message = "You do not have permission to modify this resource."

    def has_permission(self, request, view) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        user = getattr(request, "user", None)
        return bool(user and getattr(user, "is_authenticated", False))

    def has_object_permission(self, request, view, obj) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        owner = view.owner_of(obj)
        return self._same_user(owner, request.user)

    @staticmethod
    def _same_user(owner, user) -> bool:
        return bool(owner is not None and user is not None and getattr(owner, "pk", None) == getattr(user, "pk", None))


__all__ = ["IsOwnerOrReadOnly"]
