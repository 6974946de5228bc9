"""
API 응답 스키마 정의
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """API 에러 응답"""

    error: str = Field(..., description="에러 코드")
    message: str = Field(..., description="에러 메시지")
    details: dict[str, Any] | None = Field(
        default=None,
        description="상세 에러 정보",
    )


class HealthResponse(BaseModel):
    """헬스체크 응답

    GET /health 응답으로 반환됩니다.
    """

    status: str = Field(default="ok", description="서버 상태")
    version: str = Field(..., description="API 버전")
    uptime_seconds: int = Field(default=0, description="서버 가동 시간 (초)")

    # 라이프사이클 / 설정 상태
    initialized: bool | None = Field(
        default=None, description="애플리케이션 bootstrap 결과 (미등록 시 null)"
    )
    property_file: str | None = Field(default=None, description="로드된 설정 파일")
    observers: int | None = Field(default=None, description="설정 변경 옵저버 수")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "ok",
                "version": "1.0.0",
                "uptime_seconds": 3600,
                "initialized": True,
                "property_file": "/etc/app/app.properties",
                "observers": 2,
            }
        }
    }


class ConfigRefreshResponse(BaseModel):
    """설정 리로드 응답

    POST /api/v1/config/refresh 응답으로 반환됩니다.
    """

    reloaded: bool = Field(..., description="파일 변경으로 리로드되었는지 여부")
    property_file: str = Field(..., description="설정 파일 경로")
    refreshed_at: datetime = Field(..., description="확인 시각")
