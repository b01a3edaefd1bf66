"""Group presentation layer."""

from iam.presentation.groups.routes import router

__all__ = ["router"]
