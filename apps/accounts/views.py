import logging

from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.db.models import Count
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_http_methods

from .decorators import admin_required, post_required
from .forms import LoginForm, RoleForm, UserRoleForm
from .models import User
from .roles import catalog

logger = logging.getLogger(__name__)


def user_payload(user):
    from apps.employees.models import Employee

    employee = Employee.objects.for_user(user)
    return {
        'id': user.pk,
        'email': user.email,
        'full_name': user.get_full_name(),
        'initials': user.get_initials(),
        'role': user.role,
        'is_admin': user.is_admin(),
        'permissions': user.get_permissions(),
        'employee_id': str(employee.pk) if employee else None,
    }


# AUTHENTICATION VIEWS
@never_cache
@require_http_methods(['POST'])
def login_view(request):
    form = LoginForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    email = form.cleaned_data['email']
    user = authenticate(request, username=email, password=form.cleaned_data['password'])

    if user is None:
        return JsonResponse({'success': False, 'error': str(_('Invalid email or password.'))}, status=401)

    login(request, user)

    if form.cleaned_data.get('remember'):
        # Session expires in 30 days
        request.session.set_expiry(30 * 24 * 60 * 60)
    else:
        # Session expires when browser closes
        request.session.set_expiry(0)

    return JsonResponse({'success': True, 'user': user_payload(user)})


@login_required
@post_required
def logout_view(request):
    email = request.user.email
    logout(request)
    logger.info(f"User {email} logged out")
    return JsonResponse({'success': True})


@login_required
def me_view(request):
    return JsonResponse({'user': user_payload(request.user)})


# ROLE & PERMISSION MANAGEMENT (Admin Only)
@login_required
@admin_required
def roles_view(request):
    """
    GET  - role bundles with user counts + permissions grouped by category
    POST - add a role to the in-memory catalog
    """
    if request.method == 'POST':
        form = RoleForm(request.POST)
        if not form.is_valid():
            return JsonResponse({'success': False, 'errors': form.errors}, status=400)
        try:
            role = catalog.add_role(
                form.cleaned_data['id'],
                form.cleaned_data['name'],
                form.cleaned_data['description'],
                form.cleaned_data['permissions'],
            )
        except ValueError as e:
            return JsonResponse({'success': False, 'error': str(e)}, status=400)

        logger.info(f"Role '{role.id}' added by {request.user.email}")
        return JsonResponse({'success': True, 'role': role.as_dict()}, status=201)

    counts = dict(User.objects.values_list('role').annotate(total=Count('id')))
    return JsonResponse({
        'roles': catalog.as_list(user_counts=counts),
        'permissions': catalog.grouped(),
    })


@login_required
@admin_required
@post_required
def role_update_view(request, role_id):
    if role_id not in catalog.roles:
        return JsonResponse({'success': False, 'error': 'Role not found'}, status=404)

    data = request.POST.copy()
    data['id'] = role_id
    form = RoleForm(data)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    role = catalog.update_role(
        role_id,
        name=form.cleaned_data['name'],
        description=form.cleaned_data['description'],
        permissions=form.cleaned_data['permissions'],
    )
    return JsonResponse({'success': True, 'role': role.as_dict()})


@login_required
@admin_required
@post_required
def role_delete_view(request, role_id):
    try:
        removed = catalog.remove_role(role_id)
    except ValueError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    if removed is None:
        return JsonResponse({'success': False, 'error': 'Role not found'}, status=404)
    return JsonResponse({'success': True})


@login_required
@admin_required
@post_required
def user_role_view(request, pk):
    user = get_object_or_404(User, pk=pk)

    if user == request.user:
        return JsonResponse({'success': False, 'error': 'Cannot change your own role'}, status=400)

    form = UserRoleForm(request.POST, instance=user)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    form.save()
    logger.info(f"{request.user.email} set role of {user.email} to {user.role}")
    return JsonResponse({'success': True, 'role': user.role})


@login_required
@admin_required
@post_required
def toggle_user_status(request, pk):
    user = get_object_or_404(User, pk=pk)

    # Cannot deactivate self
    if user == request.user:
        return JsonResponse({'success': False, 'error': 'Cannot deactivate yourself'}, status=400)

    # Cannot deactivate superuser
    if user.is_superuser and not request.user.is_superuser:
        return JsonResponse({'success': False, 'error': 'Cannot deactivate superuser'}, status=403)

    user.is_active = not user.is_active
    user.save(update_fields=['is_active', 'updated_at'])

    return JsonResponse({'success': True, 'is_active': user.is_active})
