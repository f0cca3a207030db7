from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional
import time
import uuid

from intake.errors import SessionNotFound
from intake.services.providers import AnalysisProvider, build_provider
from intake.services.workflow import WorkflowSession
from intake.utils.logging import get_logger

logger = get_logger("sessions")


@dataclass
class SessionRecord:
    session: WorkflowSession
    created_at: float = field(default_factory=lambda: time.time())
    updated_at: float = field(default_factory=lambda: time.time())

    def touch(self) -> None:
        self.updated_at = time.time()


class SessionManager:
    def __init__(self, provider: Optional[AnalysisProvider] = None) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._provider = provider

    @property
    def provider(self) -> AnalysisProvider:
        if self._provider is None:
            self._provider = build_provider()
            logger.info(f"Analysis provider: {self._provider.name}")
        return self._provider

    def use_provider(self, provider: AnalysisProvider) -> None:
        self._provider = provider

    def create(self) -> WorkflowSession:
        session_id = str(uuid.uuid4())
        rec = SessionRecord(session=WorkflowSession(session_id, self.provider))
        self._sessions[session_id] = rec
        logger.info(f"Session created id={session_id}")
        return rec.session

    def get(self, session_id: str) -> WorkflowSession:
        rec = self._sessions.get(session_id)
        if not rec:
            raise SessionNotFound(session_id)
        rec.touch()
        return rec.session

    def close(self, session_id: str) -> None:
        rec = self._sessions.pop(session_id, None)
        if not rec:
            raise SessionNotFound(session_id)
        rec.session.close()
        logger.info(f"Session {session_id} closed")

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)

    def __len__(self) -> int:
        return len(self._sessions)


# Global manager instance
session_manager = SessionManager()
