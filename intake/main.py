from typing import Any, Dict

from fastapi import Body, FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
import uvicorn

from intake.catalog import catalog, heading_for
from intake.config import settings
from intake.errors import SessionNotFound, WorkflowConflict
from intake.render import render_outcome, result_title
from intake.schemas import (
    AnalysisPhase,
    ImagePickResponse,
    ImageSource,
    ImageSummary,
    ResultResponse,
    Selection,
    SelectionRequest,
    ServiceCatalogResponse,
    SessionView,
)
from intake.services.session_manager import session_manager
from intake.services.workflow import WorkflowSession
from intake.utils.logging import get_logger


app = FastAPI(title="Health Intake API", version="0.1.0")
logger = get_logger("app")


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    logger.info(f"API starting up, analysis provider: {session_manager.provider.name}")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("API shutting down")
    session_manager.close_all()
    await session_manager.provider.aclose()


def _get_session(session_id: str) -> WorkflowSession:
    try:
        return session_manager.get(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="session_id not found")


def _view(session: WorkflowSession) -> Dict[str, Any]:
    state = session.state
    image = state.pending_image
    return SessionView(
        session_id=session.id,
        selection=state.selection,
        phase=state.phase,
        heading=heading_for(state.selection),
        can_go_back=state.selection != Selection.none,
        can_submit=state.selection != Selection.none and not state.is_analyzing
        and (state.selection != Selection.skin or image is not None),
        pending_image=ImageSummary(
            filename=image.filename,
            content_type=image.content_type,
            size_bytes=image.size_bytes,
            width=image.width,
            height=image.height,
            preview=image.preview,
        ) if image else None,
        field_errors=state.field_errors,
        error=state.error,
        outcome=state.outcome.model_dump(by_alias=True) if state.outcome else None,
        sections=render_outcome(state.outcome),
        notifications=session.notifications,
    ).model_dump(mode="json")


@app.get("/health")
async def health():
    return {"status": "ok", "provider": session_manager.provider.name}


@app.get("/v1/services", response_model=ServiceCatalogResponse)
async def list_services():
    return catalog()


@app.post("/v1/sessions", status_code=201, response_model=SessionView)
async def create_session():
    session = session_manager.create()
    return _view(session)


@app.get("/v1/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str):
    return _view(_get_session(session_id))


@app.delete("/v1/sessions/{session_id}", status_code=204)
async def close_session(session_id: str):
    try:
        session_manager.close(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="session_id not found")
    return Response(status_code=204)


@app.post("/v1/sessions/{session_id}/selection", response_model=SessionView)
async def select_service(session_id: str, body: SelectionRequest):
    session = _get_session(session_id)
    session.select(Selection(body.service))
    return _view(session)


@app.post("/v1/sessions/{session_id}/back", response_model=SessionView)
async def go_back(session_id: str):
    session = _get_session(session_id)
    session.back()
    return _view(session)


@app.post("/v1/sessions/{session_id}/image", response_model=ImagePickResponse)
async def pick_image(
    session_id: str,
    file: UploadFile = File(...),
    source: ImageSource = Query(ImageSource.browse),
):
    """
    Accept an image for the skin workflow.

    Non-image uploads are ignored without an error: the response carries
    ``accepted=false`` and the session is unchanged.
    """
    session = _get_session(session_id)
    data = await file.read(settings.max_image_bytes + 1)
    if len(data) > settings.max_image_bytes:
        raise HTTPException(status_code=413, detail="Image too large")
    try:
        accepted = session.pick_image(data, file.content_type, file.filename, source)
    except WorkflowConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"accepted": accepted, **_view(session)}


@app.delete("/v1/sessions/{session_id}/image", response_model=SessionView)
async def remove_image(session_id: str):
    session = _get_session(session_id)
    session.remove_image()
    return _view(session)


@app.post("/v1/sessions/{session_id}/skin-analysis", status_code=202, response_model=SessionView)
async def start_skin_analysis(session_id: str):
    session = _get_session(session_id)
    try:
        session.submit_skin()
    except WorkflowConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _view(session)


@app.post("/v1/sessions/{session_id}/pregnancy-assessment", status_code=202, response_model=SessionView)
async def start_pregnancy_assessment(session_id: str, body: Dict[str, Any] = Body(default_factory=dict)):
    """
    Submit the vitals form.

    Fields are the raw strings typed by the user (``age``, ``systolicBP``,
    ``diastolicBP``, ``bloodSugar``, ``bodyTemp``, ``heartRate``). Empty or
    missing fields return 422 with one message per field.
    """
    session = _get_session(session_id)
    try:
        _, errors = session.submit_vitals(body)
    except WorkflowConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    if errors:
        return JSONResponse(status_code=422, content={"errors": errors, **_view(session)})
    return _view(session)


@app.get("/v1/sessions/{session_id}/result")
async def get_result(session_id: str, wait: bool = False):
    """
    Get the analysis result of a session.

    With ``wait=true`` the request blocks until the pending analysis resolves.
    """
    session = _get_session(session_id)
    if wait:
        await session.wait()
    state = session.state

    if state.phase == AnalysisPhase.idle:
        return JSONResponse(status_code=409, content={"status": state.phase.value, "detail": "nothing submitted"})

    if state.phase == AnalysisPhase.analyzing:
        return JSONResponse(status_code=202, content={"status": state.phase.value})

    if state.phase == AnalysisPhase.failed:
        return JSONResponse(status_code=500, content={"status": state.phase.value, "error": state.error})

    result = ResultResponse(
        session_id=session.id,
        title=result_title(state.outcome),
        selection=state.selection,
        phase=state.phase,
        outcome=state.outcome.model_dump(by_alias=True),
        sections=render_outcome(state.outcome),
        timings=session.timings,
    )
    return JSONResponse(content=result.model_dump(mode="json"))


if __name__ == "__main__":
    uvicorn.run("intake.main:app", host=settings.api_host, port=settings.api_port)
