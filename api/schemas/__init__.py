"""
API 응답 스키마 모듈
"""

from .response import ConfigRefreshResponse, ErrorResponse, HealthResponse

__all__ = [
    "ConfigRefreshResponse",
    "ErrorResponse",
    "HealthResponse",
]
