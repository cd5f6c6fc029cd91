"""
Health check router for liveness and readiness probes.
"""
from fastapi import APIRouter, Request, status

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
    Readiness check that verifies the account store.
    Returns 200 with ``degraded`` status if the store cannot be reached.
    """
    checks = {
        "api": "healthy",
        "account_store": "unknown",
    }

    store = getattr(request.app.state, "account_store", None)
    backend = store.backend_name if store is not None else None

    if store is None:
        checks["account_store"] = "unhealthy: not configured"
    else:
        try:
            await store.ping()
            checks["account_store"] = "healthy"
        except Exception as e:
            checks["account_store"] = f"unhealthy: {str(e)}"

    all_healthy = all(v == "healthy" for v in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "backend": backend,
        "checks": checks,
    }
