from rest_framework import permissions


class IsListMember(permissions.BasePermission):
    """
    Permission: User must be a member of the list.
    """

    message = 'You must be a member of this list.'

    def has_object_permission(self, request, view, obj):
        # obj is a ShoppingList or Item instance
        shopping_list = getattr(obj, 'list', obj)
        return shopping_list.has_member(request.user)
