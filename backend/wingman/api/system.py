from fastapi import APIRouter
import httpx
from loguru import logger

from wingman.config import get_settings
from wingman.core.models_catalog import DEFAULT_MODELS, PAID_MODELS
from wingman.core.personalities import AI_PERSONALITIES
from wingman.models.system import HealthResponse, ModelOption, PersonalityOut


router = APIRouter(prefix="/api", tags=["system"])


async def check_openrouter(settings) -> bool:
    try:
        async with httpx.AsyncClient(timeout=2.0) as client:
            resp = await client.get(f"{settings.openrouter_base_url.rstrip('/')}/models")
            return resp.status_code == 200
    except Exception as e:
        logger.warning(f"OpenRouter check failed: {e}")
        return False


@router.get("/system/health", response_model=HealthResponse)
async def health(deep: bool = False):
    settings = get_settings()
    response = {"status": "ok", "version": settings.app_version, "dependencies": {}}
    if deep:
        openrouter_ok = await check_openrouter(settings)
        response["status"] = "ok" if openrouter_ok else "error"
        response["dependencies"]["openrouter"] = "connected" if openrouter_ok else "error"
    return response


@router.get("/personalities", response_model=list[PersonalityOut])
async def list_personalities() -> list[PersonalityOut]:
    return [
        PersonalityOut(id=p.id, name=p.name, description=p.description)
        for p in AI_PERSONALITIES
    ]


@router.get("/models")
async def list_models() -> dict[str, list[ModelOption]]:
    return {"free": DEFAULT_MODELS, "paid": PAID_MODELS}
