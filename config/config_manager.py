"""
설정 저장소

properties(또는 YAML) 파일의 설정값을 읽고, 파일 변경 시 자동 리로드합니다.

설계 원칙:
- 애플리케이션 시작 시 한 번 생성하여 다른 컴포넌트에 주입
- 파일 변경은 백그라운드로 감시하지 않고 읽을 때마다 확인
- 변경 감지 시 전체 리로드 후 등록된 옵저버에 알림 (키별 diff 없음)
- {{key}} 변수는 재귀적으로 치환, 결과는 메모리에 캐시

사용법:
    ```python
    config = Config("app.properties", search_paths=["/etc/myapp"])

    host = config.get_value("db.host")
    port = config.get_value("smtp.port", "25")
    admins = config.get_list("admin.emails")

    # 설정 변경 시 재구성
    config.notify_on_change(lambda source: rebuild(source))
    ```
"""

import logging
import re
import threading
import time
from pathlib import Path
from typing import Iterable

from lib.errors import ConfigLoadError, ConfigReloadError, CyclicReferenceError

from .notifier import ChangeNotifier, Observer
from .properties import Entries, load_entries, split_list, unescape_delimiter

logger = logging.getLogger(__name__)

# 설정 파일에서 사용하는 {{변수}} 패턴
VARIABLE_PATTERN = re.compile(r"\{\{(.*?)\}\}")

# 변수 치환 최대 깊이
MAX_RESOLUTION_DEPTH = 32


class Config:
    """설정 저장소

    모든 읽기 연산은 먼저 파일 변경 여부를 확인합니다. 변경되었으면
    전체 키를 다시 읽고, 치환 캐시를 비운 뒤 옵저버에 알립니다.
    리로드와 알림은 하나의 RLock 안에서 수행되므로 동시에 두 번 일어나지 않습니다.
    """

    def __init__(
        self,
        property_file: str | Path,
        *,
        search_paths: Iterable[str | Path] | None = None,
        refresh_delay: float = 0.0,
        memoize: bool = True,
    ):
        """
        Args:
            property_file: 설정 파일 경로 (상대 경로면 search_paths 에서도 탐색)
            search_paths: 추가 탐색 디렉토리 목록
            refresh_delay: 자동 변경 확인 최소 간격 (초, 0이면 매번 확인)
            memoize: 치환 결과 캐시 여부

        Raises:
            ConfigLoadError: 파일이 없거나 형식이 잘못된 경우
        """
        self.refresh_delay = refresh_delay
        self.memoize = memoize

        self._lock = threading.RLock()
        self._notifier = ChangeNotifier()
        self._resolved: dict[str, str] = {}
        self._last_check = time.monotonic()

        self._path = self._locate(Path(property_file), search_paths or [])
        logger.info(f"[Config] 설정 로드: {self._path}")

        self._signature = self._stat()
        if self._signature is None:
            raise ConfigLoadError(f"설정 파일 없음: {self._path}", str(self._path))
        self._entries: Entries = load_entries(self._path)

        logger.debug(f"[Config] 설정 로드 완료: {self._path}, {len(self._entries)}개 키")

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    def get_value(self, key: str, default: str | None = None) -> str:
        """설정값 조회

        값에 {{key}} 가 있으면 해당 키의 값으로 치환합니다.

        Args:
            key: 설정 키
            default: 치환된 값이 비어 있을 때 반환할 기본값

        Returns:
            치환된 값, 키가 없으면 빈 문자열 (또는 default)

        Raises:
            ConfigReloadError: 변경된 파일을 다시 읽지 못한 경우
            CyclicReferenceError: 변수 참조가 순환하는 경우
        """
        with self._lock:
            self._maybe_refresh()
            value = self._resolve_key(key, [])

        logger.debug(f"[Config] 조회: {key}")
        if not value and default is not None:
            return default
        return value

    def get_list(self, key: str, default: list[str] | None = None) -> list[str]:
        """다중 값 조회

        반복된 키와 쉼표 구분 값을 순서대로 반환합니다. 변수 치환은 하지 않습니다.

        Args:
            key: 설정 키
            default: 목록이 비어 있을 때 반환할 기본 목록

        Returns:
            값 목록, 없으면 빈 목록 (또는 default)
        """
        with self._lock:
            self._maybe_refresh()
            values = [
                item
                for raw in self._entries.get(key, [])
                for item in split_list(raw)
            ]

        if not values and default is not None:
            return list(default)
        return values

    def get_raw(self, key: str) -> str:
        """치환/캐시 없이 파일에 저장된 값 그대로 조회"""
        with self._lock:
            self._maybe_refresh()
            raw = self._scalar(key)
        return raw if raw is not None else ""

    def has_key(self, key: str) -> bool:
        """키 존재 여부 (빈 값과 키 없음 구분용)"""
        with self._lock:
            self._maybe_refresh()
            return key in self._entries

    def keys(self) -> list[str]:
        with self._lock:
            self._maybe_refresh()
            return list(self._entries)

    @property
    def resolved_values(self) -> dict[str, str]:
        """치환 캐시 (리로드 시 초기화)"""
        with self._lock:
            return dict(self._resolved)

    @property
    def property_file(self) -> Path:
        """로드한 설정 파일 경로"""
        return self._path

    # ------------------------------------------------------------------
    # 변경 감지 / 알림
    # ------------------------------------------------------------------

    def refresh(self) -> bool:
        """설정 파일 변경 확인 후 변경되었으면 리로드

        같은 변경에 대해 실패는 한 번만 보고하며, 이전 설정값은 계속 사용됩니다.

        Returns:
            리로드 여부

        Raises:
            ConfigReloadError: 파일이 사라졌거나 읽을 수 없는 경우
        """
        with self._lock:
            self._last_check = time.monotonic()

            signature = self._stat()
            if signature == self._signature:
                return False
            self._signature = signature

            try:
                if signature is None:
                    raise ConfigLoadError(
                        f"설정 파일 없음: {self._path}", str(self._path)
                    )
                entries = load_entries(self._path)
            except ConfigLoadError as e:
                logger.error(f"[Config] 설정 리로드 실패 (이전 설정 유지): {e}")
                raise ConfigReloadError(str(e), str(self._path)) from e

            self._entries = entries
            self._resolved = {}

            logger.info(
                f"[Config] 설정 변경 감지 - "
                f"{self._notifier.count_observers()}개 옵저버에 알림"
            )
            self._notifier.publish(self)
            return True

    def notify_on_change(self, observer: Observer) -> None:
        """설정 변경 옵저버 등록

        Args:
            observer: 변경 시 호출할 함수 (인자: 변경된 Config)
        """
        self._notifier.subscribe(observer)

    def remove_on_change(self, observer: Observer) -> None:
        """설정 변경 옵저버 제거"""
        self._notifier.unsubscribe(observer)

    @property
    def observer_count(self) -> int:
        return self._notifier.count_observers()

    # ------------------------------------------------------------------
    # 내부 구현
    # ------------------------------------------------------------------

    def _maybe_refresh(self) -> None:
        if (
            self.refresh_delay > 0
            and time.monotonic() - self._last_check < self.refresh_delay
        ):
            return
        self.refresh()

    def _scalar(self, key: str) -> str | None:
        values = self._entries.get(key)
        if not values:
            return None
        return unescape_delimiter(values[0])

    def _resolve_key(self, key: str, chain: list[str]) -> str:
        if key in self._resolved:
            return self._resolved[key]

        raw = self._scalar(key)
        if raw is None:
            return ""

        if key in chain or len(chain) >= MAX_RESOLUTION_DEPTH:
            raise CyclicReferenceError(chain + [key])

        resolved = self._resolve_variables(raw, chain + [key])

        if self.memoize and resolved != raw:
            self._resolved[key] = resolved
            logger.debug(f"[Config] 치환 결과 캐시: {key}")

        return resolved

    def _resolve_variables(self, value: str, chain: list[str]) -> str:
        """{{변수}} 를 첫 번째 매치부터 반복 치환"""
        match = VARIABLE_PATTERN.search(value)
        while match:
            replacement = self._resolve_key(match.group(1), chain)
            value = value.replace(match.group(0), replacement)
            match = VARIABLE_PATTERN.search(value)

        return value

    def _stat(self) -> tuple[int, int] | None:
        """파일 변경 서명 (mtime_ns, size), 파일이 없으면 None"""
        try:
            stat = self._path.stat()
        except OSError:
            return None
        return stat.st_mtime_ns, stat.st_size

    @staticmethod
    def _locate(path: Path, search_paths: Iterable[str | Path]) -> Path:
        if path.is_absolute() or path.exists():
            return path.resolve()

        for directory in search_paths:
            candidate = Path(directory) / path
            if candidate.exists():
                return candidate.resolve()

        raise ConfigLoadError(f"설정 파일 없음: {path}", str(path))
