"""
설정 관리 모듈

Config 로 설정 파일을 읽고, ChangeNotifier 로 변경을 알리며,
ConfigWatcher 로 파일 변경 시점에 리로드합니다.
"""

from .config_manager import MAX_RESOLUTION_DEPTH, Config
from .notifier import ChangeNotifier
from .watcher import ConfigWatcher

__all__ = ["Config", "ChangeNotifier", "ConfigWatcher", "MAX_RESOLUTION_DEPTH"]
