from mehendi.errors import AuthorizationError


def is_current_user_admin():
    # Every logged-in user is the studio admin for now
    return True


def validate_admin_permissions():
    if not is_current_user_admin():
        raise AuthorizationError("Unauthorized: Admin access required")
