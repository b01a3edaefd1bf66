"""SQLAlchemy ORM model for the groups table.

A group is the tenant boundary. Its governance flag lives on the row so
it can be read in the same transaction as the member's role.
"""

from sqlalchemy import Boolean, String, true
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GroupModel(Base, TimestampMixin):
    """ORM model for groups table.

    Membership mutations lock this row (SELECT ... FOR UPDATE) before
    counting admins, which serializes them per group.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    allow_power_user_edit: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GroupModel(id={self.id}, slug={self.slug})>"
