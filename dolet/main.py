import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dolet.api import chat, recommendations
from dolet.config import settings
from dolet.database import create_db_and_tables
from dolet.services.dependencies import get_credential_provider
from dolet.services.exceptions import AllCandidatesExhausted, AuthError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Dolet health assistant...")
    create_db_and_tables()

    if settings.verify_credentials_on_startup:
        try:
            get_credential_provider()
            logger.info("Google credentials loaded for Vertex AI")
        except AuthError as e:
            # Keep serving stored data; generation requests will fail with AuthError
            logger.error("Vertex AI credentials unavailable: %s", e)

    yield


app = FastAPI(title="Dolet Health Assistant", version="0.1.0", lifespan=lifespan)


# =============================================================================
# Error responses
# =============================================================================


def _error_response(status_code: int, message: str, error: str | None = None):
    content = {"success": False, "message": message}
    if error and settings.expose_upstream_errors:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = f"{field}: {first.get('msg', 'invalid value')}" if field else "Invalid request"
    logger.warning("Request validation failed on %s: %s", request.url.path, detail)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": f"Invalid request. {detail}"},
    )


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    logger.error("Generation aborted on %s: %s", request.url.path, exc)
    return _error_response(
        500, "Server configuration error: AI credentials unavailable.", str(exc)
    )


@app.exception_handler(AllCandidatesExhausted)
async def generation_failed_handler(request: Request, exc: AllCandidatesExhausted):
    logger.error(
        "Generation failed on %s after %d attempt(s): %s",
        request.url.path,
        exc.attempts,
        exc.detail,
    )
    return _error_response(
        502, "Failed to generate a response with AI. Please try again.", exc.detail
    )


# Include routers
app.include_router(recommendations.router)
app.include_router(chat.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
