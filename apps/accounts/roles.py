"""
Role & permission catalog for the admin panel.

The catalog is held in memory: admins can add or edit role bundles for the
lifetime of the process, but nothing here is written to the database. Users
carry a role id (``User.role``) that is resolved against this catalog.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Dict, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Permission:
    id: str
    name: str
    description: str
    category: str


@dataclass
class Role:
    id: str
    name: str
    description: str
    permissions: List[str] = field(default_factory=list)

    def as_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'permissions': list(self.permissions),
        }


PERMISSIONS = [
    # Dashboard & Analytics
    Permission('dashboard.view', 'View Dashboard', 'Access main dashboard', 'Dashboard'),
    Permission('analytics.view', 'View Analytics', 'Access advanced analytics', 'Dashboard'),
    Permission('reports.generate', 'Generate Reports', 'Create and export reports', 'Dashboard'),

    # Lead Management
    Permission('leads.view', 'View Leads', 'View lead information', 'Leads'),
    Permission('leads.create', 'Create Leads', 'Add new leads', 'Leads'),
    Permission('leads.edit', 'Edit Leads', 'Modify lead information', 'Leads'),
    Permission('leads.delete', 'Delete Leads', 'Remove leads from system', 'Leads'),
    Permission('leads.assign', 'Assign Leads', 'Assign leads to team members', 'Leads'),

    # Sales Management
    Permission('sales.view', 'View Sales', 'Access sales data', 'Sales'),
    Permission('sales.create', 'Create Sales', 'Record new sales', 'Sales'),
    Permission('sales.edit', 'Edit Sales', 'Modify sales records', 'Sales'),

    # User Management
    Permission('users.view', 'View Users', 'View user information', 'Users'),
    Permission('users.create', 'Create Users', 'Add new users', 'Users'),
    Permission('users.edit', 'Edit Users', 'Modify user information', 'Users'),
    Permission('users.delete', 'Delete Users', 'Remove users from system', 'Users'),

    # System Administration
    Permission('admin.settings', 'System Settings', 'Access system configuration', 'Admin'),
    Permission('admin.roles', 'Manage Roles', 'Create and modify user roles', 'Admin'),
    Permission('admin.database', 'Database Access', 'Direct database access', 'Admin'),

    # Communication
    Permission('communication.email', 'Send Emails', 'Send email communications', 'Communication'),
    Permission('communication.sms', 'Send SMS', 'Send SMS messages', 'Communication'),

    # Attendance & Tasks
    Permission('attendance.view', 'View Attendance', 'Access attendance records', 'Attendance'),
    Permission('attendance.manage', 'Manage Attendance', 'Manage attendance records', 'Attendance'),
    Permission('tasks.view', 'View Tasks', 'Access task information', 'Tasks'),
    Permission('tasks.create', 'Create Tasks', 'Create new tasks', 'Tasks'),
    Permission('tasks.edit', 'Edit Tasks', 'Modify task information', 'Tasks'),

    # Documents
    Permission('documents.view', 'View Documents', 'Access assigned documents', 'Documents'),
    Permission('documents.manage', 'Manage Documents', 'Upload documents and set access', 'Documents'),
]

DEFAULT_ROLES = [
    Role(
        id='admin',
        name='Administrator',
        description='Full system access with all permissions',
        permissions=[p.id for p in PERMISSIONS],
    ),
    Role(
        id='manager',
        name='Manager',
        description='Management access with team oversight',
        permissions=[
            'dashboard.view', 'analytics.view', 'reports.generate',
            'leads.view', 'leads.create', 'leads.edit', 'leads.assign',
            'sales.view', 'sales.create', 'sales.edit',
            'users.view', 'communication.email', 'communication.sms',
            'attendance.view', 'attendance.manage', 'tasks.view', 'tasks.create', 'tasks.edit',
            'documents.view', 'documents.manage',
        ],
    ),
    Role(
        id='employee',
        name='Employee',
        description='Standard employee access',
        permissions=[
            'dashboard.view', 'leads.view', 'leads.create', 'leads.edit',
            'sales.view', 'sales.create', 'communication.email',
            'attendance.view', 'tasks.view', 'tasks.create', 'tasks.edit',
            'documents.view',
        ],
    ),
    Role(
        id='viewer',
        name='Viewer',
        description='Read-only access to system data',
        permissions=[
            'dashboard.view', 'leads.view', 'sales.view', 'users.view',
            'attendance.view', 'tasks.view',
        ],
    ),
]


class RoleCatalog:
    """
    In-memory registry of permission bundles.

    Unknown permission ids are dropped when a role is added or updated so a
    role can never grant something the catalog does not define.
    """

    def __init__(self, permissions=None, roles=None):
        self.permissions: Dict[str, Permission] = {p.id: p for p in (permissions or PERMISSIONS)}
        self.roles: Dict[str, Role] = {}
        for role in copy.deepcopy(roles if roles is not None else DEFAULT_ROLES):
            self.roles[role.id] = role

    def all_permission_ids(self):
        return list(self.permissions)

    def grouped(self):
        """Permissions grouped by category, in catalog order"""
        groups = {}
        for permission in self.permissions.values():
            groups.setdefault(permission.category, []).append({
                'id': permission.id,
                'name': permission.name,
                'description': permission.description,
            })
        return groups

    def permissions_for(self, role_id):
        role = self.roles.get(role_id)
        if role is None:
            return []
        return list(role.permissions)

    def _clean(self, permission_ids):
        cleaned = []
        for permission_id in permission_ids:
            if permission_id in self.permissions and permission_id not in cleaned:
                cleaned.append(permission_id)
            elif permission_id not in self.permissions:
                logger.warning(f"Ignoring unknown permission '{permission_id}'")
        return cleaned

    def add_role(self, role_id, name, description='', permissions=()):
        if role_id in self.roles:
            raise ValueError(f"Role '{role_id}' already exists")
        role = Role(role_id, name, description, self._clean(permissions))
        self.roles[role_id] = role
        return role

    def update_role(self, role_id, name=None, description=None, permissions=None):
        role = self.roles.get(role_id)
        if role is None:
            raise KeyError(role_id)
        if name is not None:
            role.name = name
        if description is not None:
            role.description = description
        if permissions is not None:
            role.permissions = self._clean(permissions)
        return role

    def remove_role(self, role_id):
        if role_id == 'admin':
            raise ValueError('The admin role cannot be removed')
        return self.roles.pop(role_id, None)

    def as_list(self, user_counts=None):
        user_counts = user_counts or {}
        return [
            {**role.as_dict(), 'user_count': user_counts.get(role.id, 0)}
            for role in self.roles.values()
        ]


catalog = RoleCatalog()


def user_has_permission(user, permission_id):
    if not user.is_authenticated:
        return False
    return user.has_dashboard_permission(permission_id)
