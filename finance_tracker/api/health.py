from fastapi import APIRouter
from sqlalchemy import text

from finance_tracker.core.config import settings
from finance_tracker.core.database import SessionLocal

router = APIRouter()


@router.get("/health")
def health_check():
    """Health check endpoint - verifies the configured store backend."""
    health_status = {
        "status": "healthy",
        "store": settings.STORE_BACKEND,
    }

    if settings.STORE_BACKEND != "sql":
        return health_status

    health_status["database"] = "disconnected"
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        health_status["database"] = "connected"
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["database"] = f"error: {str(e)}"
    finally:
        db.close()

    return health_status
