import logging
import threading
from collections import OrderedDict
from collections.abc import Callable

from chartgpt.agents.chart.orchestrator import ChartOrchestrator

logger = logging.getLogger(__name__)


class ChartSessionRegistry:
    """Process-local map of client session id -> orchestrator. Nothing is persisted.

    Holds at most ``max_sessions`` entries; creating one more evicts the
    least recently used session.
    """

    def __init__(self, factory: Callable[[], ChartOrchestrator], max_sessions: int = 1000):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._factory = factory
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, ChartOrchestrator] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> ChartOrchestrator | None:
        with self._lock:
            orchestrator = self._sessions.get(session_id)
            if orchestrator is not None:
                self._sessions.move_to_end(session_id)
            return orchestrator

    def get_or_create(self, session_id: str) -> ChartOrchestrator:
        with self._lock:
            orchestrator = self._sessions.get(session_id)
            if orchestrator is not None:
                self._sessions.move_to_end(session_id)
                return orchestrator
            orchestrator = self._factory()
            self._sessions[session_id] = orchestrator
            while len(self._sessions) > self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted chart session %s", evicted)
            return orchestrator

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
