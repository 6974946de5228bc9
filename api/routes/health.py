"""
헬스체크 API 라우터

서버 상태, 애플리케이션 초기화 결과, 설정 파일 상태를 반환합니다.
"""

import time

from fastapi import APIRouter, Depends, Request

from config import Config

from ..dependencies import get_config_store
from ..schemas.response import HealthResponse

router = APIRouter(tags=["Health"])

# 서버 시작 시각
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="헬스체크",
    description="서버 상태, bootstrap 결과, 설정 파일 상태를 반환합니다.",
)
async def health_check(
    request: Request,
    config_store: Config | None = Depends(get_config_store),
) -> HealthResponse:
    """서버 헬스체크"""
    uptime = int(time.time() - _start_time)
    initialized = getattr(request.app.state, "init", None)

    property_file = None
    observers = None
    if config_store:
        property_file = str(config_store.property_file)
        observers = config_store.observer_count

    return HealthResponse(
        status="ok" if initialized is not False else "degraded",
        version=request.app.version,
        uptime_seconds=uptime,
        initialized=initialized,
        property_file=property_file,
        observers=observers,
    )


@router.get(
    "/health/live",
    summary="Liveness 체크",
    description="서버가 살아있는지 확인합니다. (Kubernetes liveness probe용)",
)
async def liveness() -> dict[str, str]:
    """Liveness 체크 (경량)"""
    return {"status": "ok"}
