"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    return {"success": True, "status": "healthy", "service": "practicehub-backend"}
