"""Centralized exception hierarchy for CropScout.

All domain and service exceptions inherit from :class:`CropScoutError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

The monitoring core itself degrades to defaults on partial data and does not
raise; these exceptions cover caller mistakes (bad configuration, unknown
planner names) and the HTTP layer.

Blueprint-level error handling (see ``cropscout/utils/http.safe_route``) maps
these to the correct HTTP status codes automatically.

Hierarchy
---------
::

    CropScoutError (base, maps to 500)
    ├── ValidationError          (400, bad input from caller)
    ├── NotFoundError            (404, entity does not exist)
    ├── ServiceError             (500, business-logic failure)
    └── ConfigurationError       (500, missing / invalid config)
"""

from __future__ import annotations


class CropScoutError(Exception):
    """Base exception for all CropScout errors.

    Parameters
    ----------
    message:
        Human-readable description (logged server-side, **not** leaked to
        the HTTP client unless the exception class opts in).
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(CropScoutError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class NotFoundError(CropScoutError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404


# ── Server errors (5xx) ──────────────────────────────────────────────


class ServiceError(CropScoutError):
    """Business-logic failure in a service method (HTTP 500)."""

    http_status: int = 500


class ConfigurationError(CropScoutError):
    """Missing or invalid application configuration (HTTP 500)."""

    http_status: int = 500
