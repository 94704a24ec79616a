from fastapi import APIRouter

from trubalance.config.settings import settings

router = APIRouter()


@router.get("/")
async def health():
    return {"status": "ok", "message": f"{settings.APP_NAME} API running"}
