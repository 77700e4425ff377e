"""Security tests: flat role allow-lists, no implied hierarchy."""

import pytest

from app.security import policies
from app.security.exceptions import InsufficientPermissionsError
from app.security.rbac import IdentityContext, Role, RoleAuthorizer


@pytest.fixture
def authorizer():
    return RoleAuthorizer()


def _identity(role: Role) -> IdentityContext:
    return IdentityContext(id=1, username=role.value, role=role)


# Allow-lists under test:
# Operation        ADMIN  MANAGER  SUPERVISOR  WORKER
# tasks.create     ✓      ✓        ✓           ✗
# audit.list       ✓      ✓        ✗           ✗
# users.list       ✓      ✗        ✗           ✗


def test_site_leads_create_tasks_worker_denied(authorizer):
    for role in (Role.ADMIN, Role.MANAGER, Role.SUPERVISOR):
        authorizer.check(_identity(role), policies.CREATE_TASK)
    with pytest.raises(InsufficientPermissionsError) as exc:
        authorizer.check(_identity(Role.WORKER), policies.CREATE_TASK)
    assert exc.value.message == "Insufficient permissions"


def test_audit_listing_admin_and_manager_only(authorizer):
    authorizer.check(_identity(Role.ADMIN), policies.LIST_AUDIT_LOGS)
    authorizer.check(_identity(Role.MANAGER), policies.LIST_AUDIT_LOGS)
    with pytest.raises(InsufficientPermissionsError):
        authorizer.check(_identity(Role.SUPERVISOR), policies.LIST_AUDIT_LOGS)
    with pytest.raises(InsufficientPermissionsError):
        authorizer.check(_identity(Role.WORKER), policies.LIST_AUDIT_LOGS)


def test_requisition_review_admin_or_manager(authorizer):
    authorizer.check(_identity(Role.ADMIN), policies.REVIEW_REQUISITION)
    authorizer.check(_identity(Role.MANAGER), policies.REVIEW_REQUISITION)
    for role in (Role.SUPERVISOR, Role.WORKER):
        with pytest.raises(InsufficientPermissionsError):
            authorizer.check(_identity(role), policies.REVIEW_REQUISITION)

def test_user_listing_admin_only(authorizer):
    authorizer.check(_identity(Role.ADMIN), policies.LIST_USERS)
    for role in (Role.MANAGER, Role.SUPERVISOR, Role.WORKER):
        with pytest.raises(InsufficientPermissionsError):
            authorizer.check(_identity(role), policies.LIST_USERS)


def test_admin_is_not_implicitly_allowed(authorizer):
    """Roles are not hierarchical: an allow-list without ADMIN rejects admins."""
    with pytest.raises(InsufficientPermissionsError):
        authorizer.check(_identity(Role.ADMIN), frozenset({Role.MANAGER}))


def test_empty_allow_list_denies_everyone(authorizer):
    for role in Role:
        with pytest.raises(InsufficientPermissionsError):
            authorizer.check(_identity(role), frozenset())
