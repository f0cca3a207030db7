from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Tuple
import asyncio
import uuid

from intake.forms import decode_image, is_image_type, validate_vitals
from intake.pipeline.pipeline import Submission, run_analysis
from intake.schemas import ImageSource, Notification, Selection
from intake import state as view
from intake.services.providers import AnalysisProvider
from intake.state import PendingImage, ViewState
from intake.utils.logging import get_logger

logger = get_logger("workflow")

STARTED_MESSAGES = {
    Selection.skin: "Please wait while we analyze your image...",
    Selection.pregnancy: "Analyzing pregnancy risk factors...",
}

FAILED_MESSAGES = {
    Selection.skin: "Failed to analyze image. Please try again.",
    Selection.pregnancy: "Failed to analyze risk factors. Please try again.",
}


class WorkflowSession:
    """
    Drives one user's pass through the intake workflows.

    Owns the current ``ViewState`` and at most one pending analysis task.
    All mutations go through the reducers in ``intake.state``.
    """

    def __init__(self, session_id: str, provider: AnalysisProvider) -> None:
        self.id = session_id
        self.provider = provider
        self.state: ViewState = view.initial_state()
        self.notifications: List[Notification] = []
        self.timings: Dict[str, float] = {}
        self._task: Optional[asyncio.Task] = None

    # Selector
    def select(self, service: Selection) -> ViewState:
        self._cancel_pending()
        self.notifications = []
        self.state = view.select_service(self.state, service)
        logger.info(f"Session {self.id} selected {service.value}")
        return self.state

    def back(self) -> ViewState:
        self._cancel_pending()
        self.notifications = []
        self.state = view.go_back(self.state)
        logger.info(f"Session {self.id} back to service selection")
        return self.state

    # Image intake
    def pick_image(self, data: bytes, content_type: str | None, filename: str | None = None,
                   source: ImageSource = ImageSource.browse) -> bool:
        if not is_image_type(content_type):
            logger.debug(f"Session {self.id} ignored non-image {source.value} content_type={content_type}")
            return False
        self.state = view.pick_image(self.state, decode_image(data, content_type, filename))
        logger.info(f"Session {self.id} picked image via {source.value} ({len(data)} bytes)")
        return True

    def remove_image(self) -> ViewState:
        self.state = view.remove_image(self.state)
        return self.state

    # Submission
    def submit_skin(self) -> bool:
        if self.state.is_analyzing:
            logger.info(f"Session {self.id} already analyzing, skin submit ignored")
            return False
        view.check_submittable(self.state, Selection.skin)
        return self._start(Selection.skin, self.state.pending_image)

    def submit_vitals(self, raw: Mapping[str, Any]) -> Tuple[bool, Dict[str, str]]:
        if self.state.is_analyzing:
            logger.info(f"Session {self.id} already analyzing, vitals submit ignored")
            return False, {}
        view.check_submittable(self.state, Selection.pregnancy)
        vitals, errors = validate_vitals(raw)
        if vitals is None:
            self.state = view.reject_vitals(self.state, errors)
            return False, errors
        return self._start(Selection.pregnancy, vitals), {}

    def _start(self, selection: Selection, submission: Submission) -> bool:
        submission_id = str(uuid.uuid4())
        self.state = view.begin_analysis(self.state, submission_id)
        self.timings = {}
        self.notifications.append(Notification(title="Analysis Started", description=STARTED_MESSAGES[selection]))
        self._task = asyncio.create_task(self._run(submission_id, selection, submission))
        logger.info(f"Session {self.id} submission {submission_id} started ({selection.value})")
        return True

    async def _run(self, submission_id: str, selection: Selection, submission: Submission) -> None:
        try:
            outcome, timings = await run_analysis(self.provider, selection, submission)
        except asyncio.CancelledError:
            logger.info(f"Session {self.id} submission {submission_id} cancelled")
            raise
        except Exception as e:
            logger.warning(f"Session {self.id} submission {submission_id} failed: {e}")
            resolved = view.resolve_failure(self.state, submission_id, str(e) or type(e).__name__)
            if resolved is not self.state:
                self.state = resolved
                self.notifications.append(
                    Notification(title="Error", description=FAILED_MESSAGES[selection], variant="destructive")
                )
            return

        resolved = view.resolve_success(
            self.state, submission_id, outcome,
            submitted_image=submission if isinstance(submission, PendingImage) else None,
        )
        if resolved is self.state:
            logger.info(f"Session {self.id} dropped stale result of submission {submission_id}")
            return
        self.state = resolved
        self.timings = timings
        logger.info(f"Session {self.id} submission {submission_id} succeeded")

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> ViewState:
        """Wait for the pending analysis, if any, and return the resulting state."""
        task = self._task
        if task is not None:
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
        return self.state

    def close(self) -> None:
        self._cancel_pending()
