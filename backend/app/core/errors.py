"""
errors.py — Service Error Taxonomy & Error Envelope

Purpose:
- One exception family for every failure a spot/review/save operation can report.
- One JSON shape for every error response, whatever endpoint produced it.

Envelope:
    {"error": "<human readable message>", "kind": "<kind>", "fields": {...} | null}

`error` stays a plain string so existing clients that display `body.error`
keep working.

This module does NOT:
- Register FastAPI handlers (see main.py).
- Log anything; callers log with their own context before raising.
"""

from typing import Dict, Optional

from pydantic import BaseModel


class ServiceError(Exception):
    """Base exception for all service-layer failures."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = fields

    def to_envelope(self) -> "ErrorEnvelope":
        return ErrorEnvelope(error=self.message, kind=self.kind, fields=self.fields)


class Unauthenticated(ServiceError):
    """Missing, malformed or rejected bearer token."""

    kind = "unauthenticated"
    status_code = 401


class Forbidden(ServiceError):
    """Valid credential, but the caller does not own the target."""

    kind = "forbidden"
    status_code = 403


class NotFound(ServiceError):
    kind = "not_found"
    status_code = 404


class ValidationFailed(ServiceError):
    """Malformed or missing input. `fields` maps field name → problem."""

    kind = "validation_failed"
    status_code = 400


class Conflict(ServiceError):
    kind = "conflict"
    status_code = 409


class StoreUnavailable(ServiceError):
    """Downstream failure; never the caller's fault, never retried here."""

    kind = "store_unavailable"
    status_code = 500


class ErrorEnvelope(BaseModel):
    error: str
    kind: str
    fields: Optional[Dict[str, str]] = None
