"""IAM presentation layer - aggregate-based organization.

Organizes presentation concerns by aggregate (groups, members) following
vertical slicing and DDD principles. Each package contains its own routes
and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import groups, members

# Auth is enforced per-endpoint (each handler declares its own Depends)
router = APIRouter(
    prefix="/iam",
    tags=["iam"],
)

router.include_router(groups.router)
router.include_router(members.router)

__all__ = ["router"]
