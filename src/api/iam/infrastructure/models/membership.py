"""SQLAlchemy ORM model for the group_memberships table."""

from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base
from shared_kernel.authorization.types import Role


class GroupMembershipModel(Base):
    """ORM model for group memberships.

    One row per (user, group) pair. The role column is the only place a
    user's role is recorded.

    Foreign Key Constraints:
    - user_id references users.id with CASCADE delete
    - group_id references groups.id with CASCADE delete
    """

    __tablename__ = "group_memberships"
    __table_args__ = (UniqueConstraint("user_id", "group_id"),)

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="group_role", values_callable=lambda e: [r.value for r in e]),
        nullable=False,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GroupMembershipModel(user_id={self.user_id}, "
            f"group_id={self.group_id}, role={self.role})>"
        )
