"""Per-operation role allow-lists.

Each protected operation declares the exact set of roles that may invoke it.
There is no inheritance between roles: an operation open to managers is not
open to admins unless ADMIN is listed too.

Operation               ADMIN  MANAGER  SUPERVISOR  WORKER
users.list              ✓      ✗        ✗           ✗
users.create            ✓      ✗        ✗           ✗
users.activate          ✓      ✗        ✗           ✗
projects.create         ✓      ✓        ✗           ✗
projects.update         ✓      ✓        ✗           ✗
tasks.create            ✓      ✓        ✓           ✗
attendance.mark         ✓      ✓        ✓           ✗
attendance.update       ✓      ✓        ✓           ✗
leave_requests.review   ✓      ✓        ✓           ✗
requisitions.review     ✓      ✓        ✗           ✗
audit.list              ✓      ✓        ✗           ✗
"""

from app.security.rbac import Role

ADMIN_ONLY = frozenset({Role.ADMIN})
ADMIN_OR_MANAGER = frozenset({Role.ADMIN, Role.MANAGER})
SITE_LEADS = frozenset({Role.ADMIN, Role.MANAGER, Role.SUPERVISOR})

LIST_USERS = ADMIN_ONLY
CREATE_USER = ADMIN_ONLY
ACTIVATE_USER = ADMIN_ONLY
DEACTIVATE_USER = ADMIN_ONLY

CREATE_PROJECT = ADMIN_OR_MANAGER
UPDATE_PROJECT = ADMIN_OR_MANAGER

CREATE_TASK = SITE_LEADS

MARK_ATTENDANCE = SITE_LEADS
UPDATE_ATTENDANCE = SITE_LEADS
REVIEW_LEAVE_REQUEST = SITE_LEADS

REVIEW_REQUISITION = ADMIN_OR_MANAGER

LIST_AUDIT_LOGS = ADMIN_OR_MANAGER
