from rest_framework.permissions import BasePermission

from accounts.client import AuthClient
from common.session import session_for


class IsStorefrontAdmin(BasePermission):
    """Signed-in session whose user carries the admin role."""

    message = "Admin access required"

    def has_permission(self, request, view):
        return AuthClient(session_for(request)).is_admin()
