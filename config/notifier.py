"""
설정 변경 알림

Config 가 파일 변경을 감지하면 등록된 옵저버를 동기적으로 호출합니다.
"""

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Observer = Callable[[Any], None]


class ChangeNotifier:
    """변경 이벤트 발행자

    - 등록 순서대로, 호출한 스레드에서 동기 호출
    - 중복 등록을 막지 않음 (두 번 등록하면 두 번 호출)
    - 한 옵저버의 예외는 나머지 옵저버 호출에 영향을 주지 않음
    """

    def __init__(self):
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        """옵저버 등록"""
        if not callable(observer):
            raise TypeError(f"옵저버는 호출 가능해야 합니다: {observer!r}")
        self._observers.append(observer)
        logger.debug(f"[Notifier] 옵저버 등록: {_describe(observer)}")

    def unsubscribe(self, observer: Observer) -> None:
        """옵저버 제거 (첫 번째 등록분)"""
        if observer in self._observers:
            self._observers.remove(observer)

    def publish(self, source: Any) -> int:
        """모든 옵저버에 변경 이벤트 전달

        Args:
            source: 이벤트 발생원 (변경된 Config 인스턴스)

        Returns:
            정상 처리된 옵저버 수
        """
        delivered = 0
        # 콜백 안에서 등록/제거해도 이번 이벤트의 대상은 고정
        for observer in list(self._observers):
            try:
                observer(source)
                delivered += 1
            except Exception as e:
                logger.error(
                    f"[Notifier] 옵저버 실행 실패: {_describe(observer)} - {e}"
                )
        return delivered

    def count_observers(self) -> int:
        return len(self._observers)


def _describe(observer: Observer) -> str:
    return getattr(observer, "__qualname__", None) or repr(observer)
