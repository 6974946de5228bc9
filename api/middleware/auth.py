"""
API Key 인증

X-API-Key 헤더를 검증합니다. 설정 리로드 같은 관리용 엔드포인트에 사용합니다.
"""

import os

from fastapi import HTTPException, Request, status

DEV_API_KEY = "dev-api-key-change-in-production"


class APIKeyAuth:
    """API Key 인증 클래스

    사용법:
        ```python
        auth = APIKeyAuth()

        @app.post("/admin")
        async def admin_endpoint(api_key: str = Depends(auth)):
            return {"message": "Authenticated"}
        ```
    """

    HEADER_NAME = "X-API-Key"

    def __init__(self, api_keys: list[str] | None = None):
        """
        Args:
            api_keys: 유효한 API Key 목록 (None이면 환경변수에서 로드)
        """
        self._api_keys = api_keys or self._load_api_keys_from_env()

    def _load_api_keys_from_env(self) -> list[str]:
        """환경변수에서 API Key 로드

        환경변수:
            - API_KEYS: 쉼표로 구분된 API Key 목록
            - API_KEY: 단일 API Key
        """
        keys: list[str] = []

        if api_keys_str := os.getenv("API_KEYS"):
            keys.extend(k.strip() for k in api_keys_str.split(",") if k.strip())

        if key := os.getenv("API_KEY"):
            keys.append(key)

        # 개발 환경 기본 키 (프로덕션에서는 반드시 변경 필요)
        if not keys and os.getenv("ENV", "dev") == "dev":
            keys.append(DEV_API_KEY)

        return list(set(keys))

    async def __call__(self, request: Request) -> str:
        """API Key 검증

        Raises:
            HTTPException: 키가 없거나 유효하지 않은 경우 (401)
        """
        api_key = request.headers.get(self.HEADER_NAME)

        if not api_key:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={
                    "error": "MISSING_API_KEY",
                    "message": f"Missing {self.HEADER_NAME} header",
                },
            )

        if api_key not in self._api_keys:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={
                    "error": "INVALID_API_KEY",
                    "message": "Invalid API key",
                },
            )

        return api_key

    @property
    def key_count(self) -> int:
        """등록된 API Key 수"""
        return len(self._api_keys)


# 싱글톤 인스턴스
_auth_instance: APIKeyAuth | None = None


def get_api_key_auth() -> APIKeyAuth:
    """API Key 인증 인스턴스 반환 (싱글톤)"""
    global _auth_instance
    if _auth_instance is None:
        _auth_instance = APIKeyAuth()
    return _auth_instance


def reset_api_key_auth() -> None:
    """싱글톤 초기화 (환경변수 변경 후 재로드용)"""
    global _auth_instance
    _auth_instance = None
