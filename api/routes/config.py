"""
설정 API 라우터

설정 파일 변경을 즉시 확인하고 리로드합니다.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from config import Config
from lib.errors import ConfigReloadError

from ..dependencies import get_config_store, verify_api_key
from ..schemas.response import ConfigRefreshResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/config",
    tags=["Config"],
    dependencies=[Depends(verify_api_key)],
)


@router.post(
    "/refresh",
    response_model=ConfigRefreshResponse,
    summary="설정 리로드",
    description="설정 파일 변경 여부를 확인하고 변경되었으면 리로드합니다.",
)
async def refresh_config(
    config_store: Config | None = Depends(get_config_store),
) -> ConfigRefreshResponse:
    """설정 리로드

    Returns:
        ConfigRefreshResponse: 리로드 여부
    """
    if not config_store:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "CONFIG_UNAVAILABLE",
                "message": "Config store not initialized",
            },
        )

    try:
        reloaded = config_store.refresh()
    except ConfigReloadError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "RELOAD_FAILED",
                "message": str(e),
            },
        )

    logger.info(f"[Server] 설정 리로드 요청 처리: reloaded={reloaded}")
    return ConfigRefreshResponse(
        reloaded=reloaded,
        property_file=str(config_store.property_file),
        refreshed_at=datetime.now(timezone.utc),
    )
