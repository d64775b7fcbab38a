from fastapi import APIRouter

from xrate.schemas.common import APIResponse

router = APIRouter()


@router.get("/health")
async def health_check() -> APIResponse[dict]:
    """Basic health check endpoint"""
    return APIResponse(
        data={"status": "healthy", "service": "xrate-api"}
    )
