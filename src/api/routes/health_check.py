from fastapi import APIRouter, status

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health():
    """Liveness check"""
    return {"status": "ok"}
