"""Health check endpoints.

- /health: Basic health check
- /health/ready: Readiness probe (is the access policy loaded and consistent?)
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from hotelaccess import __version__
from hotelaccess.core.rbac import get_active_policy, validate_policy

router = APIRouter(tags=["health"])


def check_policy() -> Dict[str, Any]:
    """Check that the active access policy satisfies its invariants."""
    policy = get_active_policy()
    problems = validate_policy(policy)
    return {
        "status": "healthy" if not problems else "unhealthy",
        "source": policy.source,
        "roles": len(policy.rulesets),
        "problems": problems,
    }


@router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
async def readiness_check():
    policy_check = check_policy()
    healthy = policy_check["status"] == "healthy"
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if healthy else "not_ready",
            "checks": {"policy": policy_check},
        },
    )
