"""
설정 파일 로더

.properties (key = value) 형식과 YAML 형식을 같은 구조로 읽습니다.
로드 결과는 키별 값 목록(dict[str, list[str]])이며, 같은 키가 반복되면
값이 누적됩니다.

지원 형식:
- *.properties (기본): key = value / key: value / key value
- *.yaml, *.yml: 중첩 매핑은 점(.) 키로 평탄화, 리스트는 다중 값
"""

import logging
import re
import string
from pathlib import Path
from typing import Any

import yaml

from lib.errors import ConfigLoadError

logger = logging.getLogger(__name__)

Entries = dict[str, list[str]]

LIST_DELIMITER = ","
YAML_SUFFIXES = (".yaml", ".yml")

# 리스트 구분자 (\, 는 리터럴 쉼표)
_DELIMITER_PATTERN = re.compile(r"(?<!\\)" + re.escape(LIST_DELIMITER))
_ESCAPED_DELIMITER = "\\" + LIST_DELIMITER

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_KEY_TERMINATORS = "=: \t\f"


def load_entries(path: Path) -> Entries:
    """설정 파일 로드

    확장자로 형식을 판단합니다. YAML 이 아니면 properties 로 읽습니다.

    Args:
        path: 설정 파일 경로

    Returns:
        키별 값 목록 (파일 순서 유지)

    Raises:
        ConfigLoadError: 파일을 읽을 수 없거나 형식이 잘못된 경우
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"설정 파일 읽기 실패: {path} - {e}", str(path)) from e

    if path.suffix.lower() in YAML_SUFFIXES:
        entries = parse_yaml(text, str(path))
    else:
        entries = parse_properties(text, str(path))

    logger.debug(f"[Properties] 파싱 완료: {path}, {len(entries)}개 키")
    return entries


def parse_properties(text: str, source: str = "<string>") -> Entries:
    """properties 텍스트 파싱

    - '#' 또는 '!' 로 시작하는 줄은 주석
    - 줄 끝의 홀수 개 백슬래시는 다음 줄과 이어짐
    - 키는 첫 번째 이스케이프되지 않은 '=', ':' 또는 공백에서 끝남
    """
    entries: Entries = {}

    for lineno, line in _logical_lines(text):
        key, value = _split_key_value(line)
        key = _unescape(key, source, lineno)
        value = _unescape(value, source, lineno, keep=LIST_DELIMITER)
        entries.setdefault(key, []).append(value)

    return entries


def parse_yaml(text: str, source: str = "<string>") -> Entries:
    """YAML 텍스트 파싱 (점 키로 평탄화)"""
    try:
        document = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"YAML 파싱 실패: {source} - {e}", source) from e

    if not isinstance(document, dict):
        raise ConfigLoadError(
            f"YAML 최상위는 매핑이어야 합니다: {source} ({type(document).__name__})",
            source,
        )

    entries: Entries = {}
    _flatten(document, "", entries)
    return entries


def split_list(value: str) -> list[str]:
    """저장된 값을 리스트로 분리

    이스케이프되지 않은 쉼표로 나누고 각 항목을 trim 합니다. 빈 항목은 제외.
    """
    items = []
    for part in _DELIMITER_PATTERN.split(value):
        part = part.strip()
        if part:
            items.append(part.replace(_ESCAPED_DELIMITER, LIST_DELIMITER))
    return items


def unescape_delimiter(value: str) -> str:
    """스칼라 조회용: \\, 를 쉼표로 복원"""
    return value.replace(_ESCAPED_DELIMITER, LIST_DELIMITER)


def _logical_lines(text: str):
    """연속 줄을 합친 (시작 줄 번호, 논리 줄) 생성"""
    buffer: list[str] = []
    start = 0

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.lstrip(" \t\f")

        if not buffer:
            if not line or line[0] in "#!":
                continue
            start = lineno

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            buffer.append(line[:-1])
            continue

        buffer.append(line)
        yield start, "".join(buffer)
        buffer = []

    # 파일 끝의 연속 줄
    if buffer:
        yield start, "".join(buffer)


def _split_key_value(line: str) -> tuple[str, str]:
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _KEY_TERMINATORS:
            break
        index += 1

    key = line[:index]

    # 구분자 앞뒤 공백과 '=' 또는 ':' 하나를 건너뜀
    while index < length and line[index] in " \t\f":
        index += 1
    if index < length and line[index] in "=:":
        index += 1
    while index < length and line[index] in " \t\f":
        index += 1

    return key, line[index:]


def _unescape(text: str, source: str, lineno: int, keep: str = "") -> str:
    if "\\" not in text:
        return text

    result: list[str] = []
    index = 0
    length = len(text)

    while index < length:
        char = text[index]
        if char != "\\" or index + 1 >= length:
            result.append(char)
            index += 1
            continue

        escaped = text[index + 1]
        if escaped == "u":
            digits = text[index + 2 : index + 6]
            if len(digits) != 4 or any(c not in string.hexdigits for c in digits):
                raise ConfigLoadError(
                    f"잘못된 유니코드 이스케이프: {source}:{lineno} (\\u{digits})",
                    source,
                )
            result.append(chr(int(digits, 16)))
            index += 6
            continue

        if escaped in keep:
            result.append("\\" + escaped)
        else:
            result.append(_ESCAPES.get(escaped, escaped))
        index += 2

    return "".join(result)


def _flatten(node: Any, prefix: str, entries: Entries) -> None:
    if isinstance(node, dict):
        for key, value in node.items():
            child = f"{prefix}.{key}" if prefix else str(key)
            _flatten(value, child, entries)
    elif isinstance(node, list):
        # 항목 내부의 쉼표는 리스트 분리 대상이 아님
        entries[prefix] = [
            _to_string(item).replace(LIST_DELIMITER, _ESCAPED_DELIMITER)
            for item in node
        ]
    else:
        entries[prefix] = [_to_string(node)]


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
