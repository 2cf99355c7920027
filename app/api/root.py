from fastapi import APIRouter

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "Workplace Hub Backend",
        "status": "ok",
        "message": "Todo + Chat API is running",
        "docs": "/docs",
        "health": "/api/health",
    }
