"""Member administration presentation layer."""

from iam.presentation.members.routes import router

__all__ = ["router"]
