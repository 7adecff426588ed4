# grading/permissions.py
from rest_framework.permissions import BasePermission, SAFE_METHODS

WRITE_ROLES = {"REGISTRAR", "PRINCIPAL", "ADMIN"}

class IsRegistrarOrAdmin(BasePermission):
    """
    - Lecture: tout utilisateur authentifié
    - Écriture (réglages / barèmes): REGISTRAR/PRINCIPAL/ADMIN
    """
    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return getattr(user, "role", None) in WRITE_ROLES
