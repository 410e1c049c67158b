from fastapi import APIRouter

from app.api.deps import SettingsDep
from app.models import HealthStatus

router = APIRouter()


@router.get("/healthCheck", response_model=HealthStatus)
async def health_check(config: SettingsDep) -> HealthStatus:
    return HealthStatus(service=config.PROJECT_NAME)
