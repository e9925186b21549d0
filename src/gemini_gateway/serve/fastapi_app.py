"""FastAPI gateway in front of the Gemini generateContent API.

Endpoints:
- GET /health
- POST /generate-text            { "prompt": "..." }
- POST /generate-from-image      multipart: prompt, image
- POST /generate-from-document   multipart: prompt, document
- POST /generate-from-audio      multipart: prompt, audio
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from gemini_gateway.common.config import Settings, load_settings
from gemini_gateway.common.logging_setup import setup_logging
from gemini_gateway.common.uploads import stage_upload
from gemini_gateway.provider.gemini_client import GeminiClient, TextGenerator

LOGGER = logging.getLogger("gemini_gateway.app")
setup_logging()

TEXT_REQUIRED = "Prompt is required for text generation."
TEXT_FALLBACK = "An error occurred during text generation."

@dataclass(frozen=True)
class AttachmentKind:
    name: str
    required_message: str
    fallback_message: str

IMAGE = AttachmentKind(
    "image",
    "Both prompt and an image file are required.",
    "An error occurred during image-based content generation.",
)
DOCUMENT = AttachmentKind(
    "document",
    "Both prompt and a document file are required.",
    "An error occurred during document-based content generation.",
)
AUDIO = AttachmentKind(
    "audio",
    "Both prompt and an audio file are required.",
    "An error occurred during audio-based content generation.",
)

# Validation messages per path, used when FastAPI rejects the request itself.
_REQUIRED_BY_PATH = {
    "/generate-text": TEXT_REQUIRED,
    "/generate-from-image": IMAGE.required_message,
    "/generate-from-document": DOCUMENT.required_message,
    "/generate-from-audio": AUDIO.required_message,
}


class GatewayError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class GenerateTextIn(BaseModel):
    prompt: str | None = None

class GenerateOut(BaseModel):
    output: str


def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_generator(request: Request) -> TextGenerator:
    return request.app.state.generator


def _generate_from_upload(
    kind: AttachmentKind,
    prompt: str | None,
    upload: UploadFile | None,
    generator: TextGenerator,
    settings: Settings,
) -> GenerateOut:
    """Stage, validate, encode and forward one attachment; the staged file never outlives the call."""
    staged = None
    if upload is not None:
        try:
            staged = stage_upload(upload, settings.upload_dir)
        except OSError as e:
            LOGGER.error("Error staging uploaded %s file: %s", kind.name, e)
            raise GatewayError(500, kind.fallback_message) from e

    if not prompt or staged is None:
        if staged is not None:
            staged.discard()
        raise GatewayError(400, kind.required_message)

    with staged:
        try:
            part = staged.to_content_part()
            text = generator.generate(settings.model_for(kind.name), [prompt, part])
        except Exception as e:
            LOGGER.error("Error generating content from %s: %s", kind.name, e)
            raise GatewayError(500, str(e) or kind.fallback_message) from e
    return GenerateOut(output=text)


def create_app(settings: Settings | None = None, generator: TextGenerator | None = None) -> FastAPI:
    """
    Build the gateway application.

    Args:
        settings: Runtime settings; loaded from config and environment if omitted.
        generator: Generation capability; a GeminiClient built from settings if omitted.
    """
    settings = settings or load_settings()
    if generator is None:
        generator = GeminiClient(settings.api_key, settings.base_url, settings.timeout)

    app = FastAPI(title="Gemini Gateway")
    app.state.settings = settings
    app.state.generator = generator

    @app.exception_handler(GatewayError)
    async def _gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _REQUIRED_BY_PATH.get(request.url.path, "Invalid request.")
        return JSONResponse(status_code=400, content={"error": message})

    @app.get("/health")
    def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
        return {"status": "ok", "model": settings.model_for("text")}

    @app.post("/generate-text", response_model=GenerateOut)
    def generate_text(
        body: GenerateTextIn | None = None,
        generator: TextGenerator = Depends(get_generator),
        settings: Settings = Depends(get_settings),
    ) -> GenerateOut:
        prompt = body.prompt if body else None
        if not prompt:
            raise GatewayError(400, TEXT_REQUIRED)
        try:
            text = generator.generate(settings.model_for("text"), [prompt])
        except Exception as e:
            LOGGER.error("Error generating text: %s", e)
            raise GatewayError(500, str(e) or TEXT_FALLBACK) from e
        return GenerateOut(output=text)

    @app.post("/generate-from-image", response_model=GenerateOut)
    def generate_from_image(
        prompt: str | None = Form(None),
        image: UploadFile | None = File(None),
        generator: TextGenerator = Depends(get_generator),
        settings: Settings = Depends(get_settings),
    ) -> GenerateOut:
        return _generate_from_upload(IMAGE, prompt, image, generator, settings)

    @app.post("/generate-from-document", response_model=GenerateOut)
    def generate_from_document(
        prompt: str | None = Form(None),
        document: UploadFile | None = File(None),
        generator: TextGenerator = Depends(get_generator),
        settings: Settings = Depends(get_settings),
    ) -> GenerateOut:
        return _generate_from_upload(DOCUMENT, prompt, document, generator, settings)

    @app.post("/generate-from-audio", response_model=GenerateOut)
    def generate_from_audio(
        prompt: str | None = Form(None),
        audio: UploadFile | None = File(None),
        generator: TextGenerator = Depends(get_generator),
        settings: Settings = Depends(get_settings),
    ) -> GenerateOut:
        return _generate_from_upload(AUDIO, prompt, audio, generator, settings)

    return app


app = create_app()
