"""
파일 시스템 감시 기반 핫 리로드

Config 는 읽을 때만 변경을 확인합니다. 설정을 자주 읽지 않는 프로세스에서
옵저버가 곧바로 반응해야 하면 ConfigWatcher 로 파일 변경 시점에 refresh() 를
호출합니다.
"""

import logging
import threading

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from lib.errors import ConfigError

from .config_manager import Config

logger = logging.getLogger(__name__)


class _PropertyFileHandler(FileSystemEventHandler):
    def __init__(self, watcher: "ConfigWatcher"):
        self.watcher = watcher

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event, event.src_path)

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # 에디터의 "임시 파일 저장 후 이름 변경" 패턴
        self._handle(event, getattr(event, "dest_path", event.src_path))

    def _handle(self, event: FileSystemEvent, path) -> None:
        if event.is_directory:
            return
        if self.watcher.matches(path):
            logger.debug(f"[Watcher] 파일 변경 감지: {path}")
            self.watcher.schedule_refresh()


class ConfigWatcher:
    """설정 파일 감시자

    사용법:
        ```python
        config = Config("app.properties")
        watcher = ConfigWatcher(config)
        watcher.start()

        # 앱 종료 시
        watcher.stop()
        ```
    """

    def __init__(self, config: Config, debounce_seconds: float = 2.0):
        """
        Args:
            config: 감시할 Config 인스턴스
            debounce_seconds: 디바운스 시간 (초)
        """
        self.config = config
        self.debounce_seconds = debounce_seconds
        self._observer: Observer | None = None
        self._timer: threading.Timer | None = None
        self._timer_lock = threading.Lock()

    def start(self) -> None:
        """파일 감시 시작"""
        if self._observer:
            return

        directory = self.config.property_file.parent
        self._observer = Observer()
        self._observer.schedule(_PropertyFileHandler(self), str(directory), recursive=False)
        self._observer.start()
        logger.info(f"[Watcher] 파일 감시 시작: {directory}")

    def stop(self) -> None:
        """파일 감시 중지"""
        with self._timer_lock:
            if self._timer:
                self._timer.cancel()
                self._timer = None

        if self._observer:
            self._observer.stop()
            self._observer.join()
            self._observer = None
            logger.info("[Watcher] 파일 감시 중지")

    @property
    def running(self) -> bool:
        return self._observer is not None

    def matches(self, path) -> bool:
        """이벤트 경로가 감시 대상 설정 파일인지 확인"""
        if isinstance(path, bytes):
            path = path.decode()
        return str(path) == str(self.config.property_file)

    def schedule_refresh(self) -> None:
        """디바운스 후 refresh 예약 (이전 예약은 취소)"""
        with self._timer_lock:
            if self._timer:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_seconds, self._refresh)
            self._timer.daemon = True
            self._timer.start()

    def _refresh(self) -> None:
        with self._timer_lock:
            self._timer = None
        try:
            if self.config.refresh():
                logger.info("[Watcher] 설정 리로드 완료")
        except ConfigError as e:
            logger.error(f"[Watcher] 리로드 실패: {e}")
