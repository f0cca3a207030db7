class IntakeError(Exception):
    """Base class for intake workflow errors."""


class WorkflowConflict(IntakeError):
    """Action is not allowed for the current selection or phase."""


class AnalysisError(IntakeError):
    """The analysis provider could not produce an outcome."""


class SessionNotFound(IntakeError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"session {session_id} not found")
        self.session_id = session_id
