"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.authorization_probe import (
    AdminInvariantGuardProbe,
    DefaultAdminInvariantGuardProbe,
    DefaultGovernancePolicyProbe,
    DefaultMembershipResolverProbe,
    GovernancePolicyProbe,
    MembershipResolverProbe,
)
from iam.application.observability.group_service_probe import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from iam.application.observability.user_service_probe import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)

__all__ = [
    "AdminInvariantGuardProbe",
    "DefaultAdminInvariantGuardProbe",
    "GovernancePolicyProbe",
    "DefaultGovernancePolicyProbe",
    "MembershipResolverProbe",
    "DefaultMembershipResolverProbe",
    "GroupServiceProbe",
    "DefaultGroupServiceProbe",
    "UserServiceProbe",
    "DefaultUserServiceProbe",
]
