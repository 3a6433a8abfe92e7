# Decorators in this file:
# 1. admin_required - Only admins can access
# 2. role_required - Only the listed roles can access
# 3. permission_required - User's role bundle must grant the permission ids
# 4. employee_required - User must map to an Employee Directory row
# 5. post_required - Only POST requests allowed
#
# These sit under Django's login_required, which sends anonymous users to
# LOGIN_URL. Denials past that point are JSON errors:
#   {'success': False, 'error': '...'} with 403 / 405
# ==============================================================================

import logging
from functools import wraps

from django.http import JsonResponse
from django.utils.translation import gettext_lazy as _

from .roles import user_has_permission

logger = logging.getLogger(__name__)


def _error(message, status):
    return JsonResponse({'success': False, 'error': str(message)}, status=status)


# ROLE-BASED DECORATORS
def admin_required(view_func):
    """
    Decorator: Only admins can access this view

    Passes when the role is 'admin' or the user is a superuser.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if request.user.is_authenticated and request.user.is_admin():
            return view_func(request, *args, **kwargs)

        logger.warning(f"Admin access denied for {request.user} on {request.path}")
        return _error(_('Admin access required'), 403)

    return wrapper


def role_required(*allowed_roles):
    """
    Decorator: Only specific roles can access

    Usage:
        @login_required
        @role_required('admin', 'manager')
        def team_report(request):
            ...
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if getattr(request.user, 'role', None) in allowed_roles or request.user.is_superuser:
                return view_func(request, *args, **kwargs)

            return _error(_('You do not have permission to access this page.'), 403)

        return wrapper

    return decorator


# PERMISSION DECORATORS
def permission_required(*permissions):
    """
    Decorator: Check dashboard permission ids (see apps.accounts.roles)

    Usage:
        @login_required
        @permission_required('leads.view', 'leads.edit')
        def lead_update_view(request, pk):
            # User's role must grant both permissions
            ...
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            missing = [perm for perm in permissions if not user_has_permission(request.user, perm)]
            if not missing:
                return view_func(request, *args, **kwargs)

            logger.warning(f"{request.user} is missing {', '.join(missing)} for {request.path}")
            return _error(_('You do not have permission to perform this action.'), 403)

        return wrapper

    return decorator


def employee_required(view_func):
    """
    Decorator: the logged-in user must have an Employee Directory row

    The row is matched on official email (case-insensitive) and attached
    to the request as ``request.employee``.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        from apps.employees.models import Employee

        employee = Employee.objects.for_user(request.user)
        if employee is None:
            return _error(_('Employee record not found for this account.'), 403)

        request.employee = employee
        return view_func(request, *args, **kwargs)

    return wrapper


# REQUEST TYPE DECORATORS
def post_required(view_func):

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if request.method == 'POST':
            return view_func(request, *args, **kwargs)

        return _error('POST requests only', 405)

    return wrapper
