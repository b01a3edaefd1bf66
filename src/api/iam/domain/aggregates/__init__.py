"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.group import Group
from iam.domain.aggregates.user import User

__all__ = [
    "Group",
    "User",
]
