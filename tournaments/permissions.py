from rest_framework import permissions


class IsTournamentOrganizerOrAdmin(permissions.BasePermission):
    """
    Read access for any authenticated user. Creating a tournament requires
    the organizer flag; changing one requires being its organizer or staff.
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        if request.method in permissions.SAFE_METHODS or view.action == "join":
            return True

        if request.user.is_staff:
            return True

        if view.action == "create":
            return request.user.is_organizer

        # Object-level permission is the source of truth for the rest.
        return True

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS or view.action == "join":
            return True
        return request.user.is_staff or obj.organizer_id == request.user.pk
