"""
main.py — FastAPI Application Entrypoint

Purpose:
- Initialize application services (logging, config).
- Register API routers under /api.
- Map every service error to the single JSON error envelope.
- Provide `app` object used by ASGI server (uvicorn / hypercorn).

No business logic lives in this file.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import ServiceError, ValidationFailed
from app.core.logging import configure_logging, get_logger
from app.api.v1 import geocode, profile, spots

# -----------------------------------------------------------------------------
# App Initialization
# -----------------------------------------------------------------------------

configure_logging(settings.LOG_LEVEL)  # Set logging defaults at startup
logger = get_logger(__name__)

app = FastAPI(
    title="SlopeScout API",
    description="Spot map backend: spots, saved spots and reviews on top of Supabase",
    version="0.1.0",
)

# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------------------------------------------------------
# Error Envelope
# -----------------------------------------------------------------------------

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope().model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Pydantic validation failures become 400 `validation_failed` with a field map."""
    fields = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        key = ".".join(loc) or "body"
        message = str(error.get("msg", "Invalid value."))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        fields.setdefault(key, message)

    summary = "; ".join(f"{key}: {message}" for key, message in fields.items())
    envelope = ValidationFailed(summary or "Invalid request.", fields=fields).to_envelope()
    return JSONResponse(status_code=ValidationFailed.status_code, content=envelope.model_dump())

# -----------------------------------------------------------------------------
# Router Registration
# -----------------------------------------------------------------------------

app.include_router(spots.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(geocode.router, prefix="/api")

# -----------------------------------------------------------------------------
# Health Check
# -----------------------------------------------------------------------------

@app.get("/")
def root():
    return {"status": "ok", "message": "SlopeScout API is running!"}
