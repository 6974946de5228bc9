"""
Pytest 설정 및 공통 Fixture
"""

import os
import shutil
from pathlib import Path
from typing import Callable

import pytest

from config import Config

RESOURCES_DIR = Path(__file__).parent / "resources"


@pytest.fixture
def properties_file(tmp_path: Path) -> Path:
    """테스트용 설정 파일 (임시 디렉토리 복사본)"""
    target = tmp_path / "test.app.properties"
    shutil.copy(RESOURCES_DIR / "test.app.properties", target)
    return target


@pytest.fixture
def config(properties_file: Path) -> Config:
    """테스트용 Config"""
    return Config(properties_file)


@pytest.fixture
def write_properties(tmp_path: Path) -> Callable[..., Path]:
    """임시 설정 파일 생성 함수"""

    def write(text: str, name: str = "app.properties") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write


@pytest.fixture
def rewrite_file() -> Callable[[Path, str], None]:
    """파일 내용 변경 함수

    파일시스템 타임스탬프 해상도와 무관하게 변경으로 감지되도록
    mtime 을 이전 값보다 2초 뒤로 설정합니다.
    """

    def rewrite(path: Path, text: str) -> None:
        before = path.stat().st_mtime_ns
        path.write_text(text, encoding="utf-8")
        mtime = before + 2_000_000_000
        os.utime(path, ns=(mtime, mtime))

    return rewrite


@pytest.fixture(autouse=True)
def reset_api_state():
    """API 모듈 전역 상태 초기화"""
    from api.dependencies import reset_settings, set_config_store
    from api.middleware.auth import reset_api_key_auth

    set_config_store(None)
    reset_settings()
    reset_api_key_auth()
    yield
    set_config_store(None)
    reset_settings()
    reset_api_key_auth()
