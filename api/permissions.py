from rest_framework import permissions


def is_admin_user(user):
    """Admins are users with the admin role, or Django superusers."""
    if not user or not user.is_authenticated:
        return False
    return user.is_superuser or getattr(user, 'role', None) == 'admin'


class IsAdminRole(permissions.BasePermission):
    """
    Only school admins may use the admin endpoints.
    Anonymous users get 401, signed-in students get 403.
    """
    message = "Admin access required."

    def has_permission(self, request, view):
        return is_admin_user(request.user)

