"""Status channel the scrapers report non-fatal problems on."""

from typing import Any, Dict, List, Protocol, Tuple

from paperscrape.logging import get_logger


class StatusChannel(Protocol):
    def set(self, key: str, value: Any) -> None: ...


class SharedState:
    """
    In-process stand-in for the host application's shared view state.

    Keeps the latest value per key plus the full history, and logs every
    update so that diagnostics survive even when nobody is listening.
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)
        self._state: Dict[str, Any] = {}
        self.history: List[Tuple[str, Any]] = []

    def set(self, key: str, value: Any) -> None:
        self._state[key] = value
        self.history.append((key, value))
        self.logger.warning(f"{key}: {value}")

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)
