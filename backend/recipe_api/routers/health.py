"""
Health check router for liveness and readiness probes.
"""
from fastapi import APIRouter, Request, status

from recipe_api.dependencies.services import get_services

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check with dependencies",
)
async def readiness_check(request: Request):
    """
    Readiness check that verifies the document store and revocation store.
    Redis reports `disabled` when revocations are kept in process.
    """
    services = get_services(request)
    checks = {
        "api": "healthy",
        "mongodb": "unknown",
        "redis": "disabled",
    }

    try:
        await services.db.command("ping")
        checks["mongodb"] = "healthy"
    except Exception as e:
        checks["mongodb"] = f"unhealthy: {str(e)}"

    if services.redis is not None:
        try:
            await services.redis.ping()
            checks["redis"] = "healthy"
        except Exception as e:
            checks["redis"] = f"unhealthy: {str(e)}"

    all_healthy = all(v in ("healthy", "disabled") for v in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }
