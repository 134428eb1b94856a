from fastapi import APIRouter

from datamagic.dependencies import DataMagicDep, SettingsDep

router = APIRouter(tags=["Health"])


@router.get("/ping")
def ping(settings: SettingsDep, data_magic: DataMagicDep) -> dict:
    healthy = data_magic.search_client.health_check()
    return {
        "status": "ok" if healthy else "degraded",
        "version": settings.app_version,
        "search_engine": "connected" if healthy else "unavailable",
    }
