"""FastAPI application entry point for Meeting Digest.

The service stands in for the browser front-end: one process-wide workspace,
and one endpoint per user action (credential, files, reset, analyze, chat,
export, theme).
"""

import logging

from fastapi import APIRouter, FastAPI, File, HTTPException, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import Settings, get_settings
from app.preferences import PreferencesStore
from app.schemas import (
    ChatMessageSchema,
    ChatRequest,
    ChatResponse,
    CredentialRequest,
    ErrorDetail,
    ErrorResponse,
    PreferencesResponse,
    PreferencesUpdate,
    StateResponse,
)
from app.security import APIKeyMiddleware, MaxBodySizeMiddleware, RequestIDMiddleware
from meeting_digest import AnalysisWorkspace, AudioFile, ProcessingStatus, export_filename, render_export
from meeting_digest.core.audio import guess_mime_type
from meeting_digest.core.logging import mask_secret, setup_logging

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_settings_safe() -> Settings:
    """Load settings, falling back to defaults when the environment is invalid.

    Keeps `app.main` importable (tests, tooling) with a broken .env; the
    problem is logged and the service runs on built-in defaults.
    """
    try:
        return get_settings()
    except ValueError as e:
        logger.error(f"Using default settings: {e}")
        return Settings.model_construct()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application with all middleware configured."""
    settings = settings or _load_settings_safe()

    setup_logging(settings.log_level)

    application = FastAPI(
        title="Meeting Digest",
        description="Summarize meeting recordings and chat about them with a hosted generative model",
        version=__version__,
    )

    # Preferences are loaded once here and saved on every change
    store = PreferencesStore(settings.preferences_path)
    preferences = store.load()
    credential = preferences.api_key or settings.gemini_api_key or ""

    application.state.settings = settings
    application.state.preferences_store = store
    application.state.preferences = preferences
    application.state.workspace = AnalysisWorkspace(settings.to_summarizer_config(), credential=credential)

    # Middleware stack (order matters: outermost is listed first, executes first)
    # 1. Request ID, assigned before anything else
    application.add_middleware(RequestIDMiddleware)

    # 2. API key enforcement (skips /health)
    application.add_middleware(APIKeyMiddleware, api_key=settings.api_key)

    # 3. Body size guard for uploads
    application.add_middleware(MaxBodySizeMiddleware, max_bytes=settings.max_upload_bytes)

    # 4. CORS, configured from environment
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    application.include_router(router)
    return application


def _workspace(request: Request) -> AnalysisWorkspace:
    return request.app.state.workspace


def _error(status_code: int, error_type: str, message: str) -> HTTPException:
    error_response = ErrorResponse(error=ErrorDetail(type=error_type, message=message))
    return HTTPException(status_code=status_code, detail=error_response.model_dump())


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"ok": True, "version": __version__}


@router.get("/v1/state")
async def get_state(request: Request) -> StateResponse:
    """Current status, files, result and chat log."""
    return StateResponse.from_workspace(_workspace(request))


@router.put("/v1/credential")
async def set_credential(body: CredentialRequest, request: Request) -> StateResponse:
    """Set the credential and persist it with the other preferences."""
    workspace = _workspace(request)
    workspace.set_credential(body.api_key)

    prefs = request.app.state.preferences.model_copy(update={"api_key": workspace.credential})
    request.app.state.preferences_store.save(prefs)
    request.app.state.preferences = prefs
    logger.info("Credential updated (%s)", mask_secret(workspace.credential))

    return StateResponse.from_workspace(workspace)


@router.get("/v1/preferences")
async def get_preferences(request: Request) -> PreferencesResponse:
    prefs = request.app.state.preferences
    return PreferencesResponse(dark_mode=prefs.dark_mode, has_credential=bool(prefs.api_key))


@router.put("/v1/preferences")
async def update_preferences(body: PreferencesUpdate, request: Request) -> PreferencesResponse:
    """Change the theme and persist it."""
    prefs = request.app.state.preferences.model_copy(update={"dark_mode": body.dark_mode})
    request.app.state.preferences_store.save(prefs)
    request.app.state.preferences = prefs
    return PreferencesResponse(dark_mode=prefs.dark_mode, has_credential=bool(prefs.api_key))


@router.post("/v1/files")
async def add_files(request: Request, files: list[UploadFile] = File(...)) -> StateResponse:
    """
    Add one or more audio uploads.

    Any previous result and chat are discarded and the workspace returns to
    idle. The audio is not validated locally; the upstream API decides what
    it accepts.
    """
    workspace = _workspace(request)

    audio_files = []
    for position, upload in enumerate(files):
        name = upload.filename or f"audio-{position + 1}"
        content = await upload.read()
        audio_files.append(
            AudioFile(name=name, content=content, mime_type=guess_mime_type(name, upload.content_type))
        )

    workspace.add_files(audio_files)
    return StateResponse.from_workspace(workspace)


@router.delete("/v1/files/{index}")
async def remove_file(index: int, request: Request) -> StateResponse:
    """Remove one file by position and return to idle."""
    workspace = _workspace(request)
    try:
        workspace.remove_file(index)
    except IndexError as e:
        raise _error(404, "file_not_found", str(e))
    return StateResponse.from_workspace(workspace)


@router.post("/v1/reset")
async def reset(request: Request) -> StateResponse:
    """Drop all files, the result and the chat."""
    workspace = _workspace(request)
    workspace.reset()
    return StateResponse.from_workspace(workspace)


@router.post("/v1/analyze")
async def analyze(request: Request) -> StateResponse:
    """
    Run the analysis over the current files.

    Without a credential or files, or while another analysis is running, the
    request changes nothing and the current state is returned. Failures are
    reported through the error state, not through the HTTP status.
    """
    workspace = _workspace(request)
    await workspace.analyze()
    return StateResponse.from_workspace(workspace)


@router.post("/v1/chat")
async def chat(body: ChatRequest, request: Request) -> ChatResponse:
    """Ask one follow-up question about the analyzed meeting."""
    workspace = _workspace(request)
    if workspace.state.status != ProcessingStatus.COMPLETED or workspace.chat_session is None:
        raise _error(409, "no_context", "Chat is available only after a completed analysis")

    try:
        reply = await workspace.ask(body.message)
    except Exception as e:
        logger.exception(f"Unexpected error in chat: {e}")
        raise _error(500, "internal_error", "An unexpected error occurred")

    return ChatResponse(
        reply=ChatMessageSchema.from_message(reply) if reply is not None else None,
        messages=[ChatMessageSchema.from_message(m) for m in workspace.messages],
    )


@router.get("/v1/export")
async def export(request: Request) -> Response:
    """Download the detailed summary as a date-named markdown file."""
    result = _workspace(request).result
    if result is None:
        raise _error(404, "no_result", "There is no analysis result to export")

    filename = export_filename()
    return Response(
        content=render_export(result).encode("utf-8"),
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


app = create_app()
