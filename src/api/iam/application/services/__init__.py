"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases. They are the "front door" to
the IAM context, and the only part of it other contexts may import.
"""

from iam.application.services.admin_invariant_guard import AdminInvariantGuard
from iam.application.services.governance_policy import GovernancePolicy, role_may_edit
from iam.application.services.group_service import GroupService
from iam.application.services.membership_resolver import MembershipResolver
from iam.application.services.user_service import UserService

__all__ = [
    "AdminInvariantGuard",
    "GovernancePolicy",
    "GroupService",
    "MembershipResolver",
    "UserService",
    "role_may_edit",
]
