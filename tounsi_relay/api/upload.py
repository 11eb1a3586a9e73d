"""
tounsi_relay/api/upload.py
===========================
API Upload Endpoint — Tounsi Relay

Responsibility:
    - Expose POST /audio
    - Accept one audio clip plus a ``direction`` form field
      ("tn2de" | "de2tn", default "tn2de") via multipart/form-data
    - Save the clip to the upload directory, run the relay, and remove
      the file again on EVERY exit path
    - Serve the browser client from the static directory

Response (HTTP 200, translated or ignored):
    {direction, ignored, source_text, source_latin,
     target_de, target_arabic, target_latin}

Errors:
    400 {"error": ...}  missing file / invalid direction
    500 {"error": ...}  anything else (logged with traceback)
"""

import logging
import os
import tempfile

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from tounsi_relay import __version__
from tounsi_relay.config import Settings
from tounsi_relay.nlp.translator import OpenAITranslator
from tounsi_relay.pipeline import RelayService
from tounsi_relay.schemas import DEFAULT_DIRECTION, Direction, InvalidDirectionError
from tounsi_relay.stt.whisper_client import WhisperTranscriber

logger = logging.getLogger("tounsi_relay.api")

UPLOAD_SUFFIX = ".wav"

ERROR_MISSING_AUDIO = "Audio-Datei fehlt"
ERROR_INVALID_DIRECTION = "Ungültige direction"
ERROR_PROCESSING = "Fehler beim Verarbeiten"


# ---------------------------------------------------------------------------
# Upload file handling
# ---------------------------------------------------------------------------


def safe_unlink(path: str | None) -> None:
    """Remove ``path`` if it exists. Never raises."""
    if not path:
        return
    try:
        if os.path.exists(path):
            os.unlink(path)
    except OSError as exc:
        logger.debug("Could not remove upload %s: %s", path, exc)


async def save_upload(upload: UploadFile, upload_dir: str) -> str:
    """
    Write the uploaded clip to a unique ``.wav`` file in ``upload_dir``.

    The browser client records WAV, so the suffix is fixed.

    Returns:
        Path of the saved file. The caller owns its removal.
    """
    data = await upload.read()

    os.makedirs(upload_dir, exist_ok=True)
    fd, path = tempfile.mkstemp(suffix=UPLOAD_SUFFIX, dir=upload_dir)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
    except Exception:
        safe_unlink(path)
        raise
    return path


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def build_service(settings: Settings) -> RelayService:
    """Wire the OpenAI-backed collaborators into a RelayService."""
    return RelayService(
        settings=settings,
        transcriber=WhisperTranscriber(settings),
        translator=OpenAITranslator(settings),
    )


def create_app(
    settings: Settings | None = None,
    service: RelayService | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Runtime settings; read from the environment if omitted.
        service: Relay service; built from ``settings`` if omitted.
    """
    settings = settings or Settings.from_env()
    service = service or build_service(settings)

    app = FastAPI(
        title="Tounsi Relay",
        description="Live speech translation Tunisian Darija <-> German.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.relay_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Endpoints
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/audio")
    async def relay_audio(
        request: Request,
        audio: UploadFile | None = File(None),
        direction: str | None = Form(None),
    ):
        """
        Transcribe and translate one clip.

        Args:
            audio: Uploaded clip (WAV).
            direction: "tn2de" (default) or "de2tn".
        """
        if audio is None:
            return _error(400, ERROR_MISSING_AUDIO)

        relay: RelayService = request.app.state.relay_service
        upload_dir: str = request.app.state.settings.upload_dir

        saved_path: str | None = None
        try:
            saved_path = await save_upload(audio, upload_dir)

            try:
                selected = Direction.parse(direction or DEFAULT_DIRECTION.value)
            except InvalidDirectionError as exc:
                logger.warning("Rejected request: %s", exc)
                return _error(400, ERROR_INVALID_DIRECTION)

            logger.info(
                "Audio received: %s (%s, %s) dir=%s",
                saved_path,
                audio.filename,
                audio.content_type,
                selected.value,
            )

            result = await relay.process(saved_path, selected)
            return JSONResponse(status_code=200, content=result.to_response())

        except Exception as exc:
            logger.error("Relay failed: %s", exc, exc_info=True)
            return _error(500, ERROR_PROCESSING)

        finally:
            safe_unlink(saved_path)

    # Static client last so it never shadows the API routes.
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount(
            "/",
            StaticFiles(directory=settings.static_dir, html=True),
            name="static",
        )
    else:
        logger.debug("Static directory %r not found — not mounted.", settings.static_dir)

    return app
