"""
View state of one intake session and the pure functions that transition it.

Every reducer takes a ``ViewState`` and returns a new one; nothing here
performs I/O or awaits.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from intake.errors import WorkflowConflict
from intake.schemas import AnalysisOutcome, AnalysisPhase, Selection


@dataclass(frozen=True)
class PendingImage:
    data: bytes = field(repr=False)
    content_type: str
    preview: str = field(repr=False)
    filename: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ViewState:
    selection: Selection = Selection.none
    phase: AnalysisPhase = AnalysisPhase.idle
    outcome: Optional[AnalysisOutcome] = None
    pending_image: Optional[PendingImage] = None
    field_errors: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None
    submission_id: Optional[str] = None

    @property
    def is_analyzing(self) -> bool:
        return self.phase == AnalysisPhase.analyzing


def initial_state() -> ViewState:
    return ViewState()


def select_service(state: ViewState, service: Selection) -> ViewState:
    if service == Selection.none:
        return go_back(state)
    return ViewState(selection=service)


def go_back(state: ViewState) -> ViewState:
    return ViewState()


def pick_image(state: ViewState, image: PendingImage) -> ViewState:
    if state.selection != Selection.skin:
        raise WorkflowConflict("image intake is only available on the skin workflow")
    return replace(state, pending_image=image)


def remove_image(state: ViewState) -> ViewState:
    if state.pending_image is None:
        return state
    return replace(state, pending_image=None)


def reject_vitals(state: ViewState, errors: Dict[str, str]) -> ViewState:
    return replace(state, field_errors=dict(errors))


def check_submittable(state: ViewState, service: Selection) -> None:
    """Raise ``WorkflowConflict`` when ``service`` cannot be submitted right now."""
    if state.selection != service:
        raise WorkflowConflict(f"{service.value} workflow is not active (selection={state.selection.value})")
    if service == Selection.skin and state.pending_image is None:
        raise WorkflowConflict("no image selected")


def begin_analysis(state: ViewState, submission_id: str) -> ViewState:
    # Single flight: a submission while analyzing leaves the state untouched
    if state.is_analyzing:
        return state
    return replace(
        state,
        phase=AnalysisPhase.analyzing,
        outcome=None,
        error=None,
        field_errors={},
        submission_id=submission_id,
    )


def _is_current(state: ViewState, submission_id: str) -> bool:
    return state.is_analyzing and state.submission_id == submission_id


def resolve_success(state: ViewState, submission_id: str, outcome: AnalysisOutcome,
                    submitted_image: Optional[PendingImage] = None) -> ViewState:
    if not _is_current(state, submission_id):
        return state
    # An image picked while analyzing was never submitted and survives
    pending = state.pending_image
    if pending is not None and pending is submitted_image:
        pending = None
    return replace(
        state,
        phase=AnalysisPhase.succeeded,
        outcome=outcome,
        pending_image=pending,
        error=None,
    )


def resolve_failure(state: ViewState, submission_id: str, message: str) -> ViewState:
    if not _is_current(state, submission_id):
        return state
    return replace(state, phase=AnalysisPhase.failed, outcome=None, error=message)
