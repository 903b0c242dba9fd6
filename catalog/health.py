from datetime import datetime

from fastapi import APIRouter

router = APIRouter()

@router.get("/api/health")
async def health_check():
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.utcnow().isoformat()
    }
