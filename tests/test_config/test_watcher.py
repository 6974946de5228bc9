"""
ConfigWatcher 핫 리로드 테스트

실제 파일 시스템 이벤트 대신 핸들러와 디바운스 동작을 직접 검증합니다.
"""

import time
from unittest.mock import MagicMock

from watchdog.events import DirModifiedEvent, FileModifiedEvent

from config import Config, ConfigWatcher
from config.watcher import _PropertyFileHandler
from lib.errors import ConfigReloadError


def _mock_config(path) -> MagicMock:
    config = MagicMock(spec=Config)
    config.property_file = path
    config.refresh.return_value = True
    return config


class TestConfigWatcher:
    """ConfigWatcher 테스트"""

    def test_matches_property_file_only(self, properties_file):
        watcher = ConfigWatcher(_mock_config(properties_file))

        assert watcher.matches(str(properties_file))
        assert watcher.matches(str(properties_file).encode())
        assert not watcher.matches(str(properties_file.parent / "other.properties"))

    def test_debounced_refresh(self, properties_file):
        """연속 변경은 한 번의 refresh 로 합쳐짐"""
        config = _mock_config(properties_file)
        watcher = ConfigWatcher(config, debounce_seconds=0.05)

        watcher.schedule_refresh()
        watcher.schedule_refresh()
        watcher.schedule_refresh()
        time.sleep(0.5)

        config.refresh.assert_called_once()

    def test_handler_schedules_on_modification(self, properties_file):
        config = _mock_config(properties_file)
        watcher = ConfigWatcher(config, debounce_seconds=0.01)
        handler = _PropertyFileHandler(watcher)

        handler.on_modified(DirModifiedEvent(str(properties_file.parent)))
        handler.on_modified(FileModifiedEvent(str(properties_file.parent / "other.txt")))
        time.sleep(0.2)
        config.refresh.assert_not_called()

        handler.on_modified(FileModifiedEvent(str(properties_file)))
        time.sleep(0.3)
        config.refresh.assert_called_once()

    def test_refresh_error_is_logged(self, properties_file, caplog):
        config = _mock_config(properties_file)
        config.refresh.side_effect = ConfigReloadError("file vanished")
        watcher = ConfigWatcher(config)

        watcher._refresh()

        assert "file vanished" in caplog.text

    def test_start_stop(self, config):
        watcher = ConfigWatcher(config)

        watcher.start()
        assert watcher.running

        watcher.stop()
        assert not watcher.running

    def test_stop_cancels_pending_refresh(self, properties_file):
        config = _mock_config(properties_file)
        watcher = ConfigWatcher(config, debounce_seconds=0.2)

        watcher.schedule_refresh()
        watcher.stop()
        time.sleep(0.4)

        config.refresh.assert_not_called()
