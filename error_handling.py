"""
Error Handling Module for the App Usage Report.
Provides decorators that translate transport failures into API errors
and give every pipeline phase structured error handling.
"""

import logging
import functools
from typing import TypeVar, Callable, Any

import requests

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class PipelinePhaseError(Exception):
    """Base exception for pipeline phase errors."""

    def __init__(self, message: str, phase: str = "", details: dict | None = None):
        self.phase = phase
        self.details = details or {}
        super().__init__(message)


class DataRetrievalError(PipelinePhaseError):
    """Raised when the usage dataset cannot be retrieved."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, phase="FETCH", details=details)


class DataTransformationError(PipelinePhaseError):
    """Raised when report assembly fails outside the per-row loop."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, phase="TRANSFORM", details=details)


class ExportError(PipelinePhaseError):
    """Raised when the report cannot be written."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, phase="EXPORT", details=details)


class DataValidationError(PipelinePhaseError):
    """Raised when input or output data fails validation."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, phase="VALIDATION", details=details)


class APIError(Exception):
    """Base exception for API-related errors."""

    def __init__(self, message: str, status_code: int | str | None = None, endpoint: str = ""):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class AuthenticationError(APIError):
    """Raised when API authentication fails (401/403)."""


class RateLimitError(APIError):
    """Raised when API rate limit is exceeded (429)."""


class ServerError(APIError):
    """Raised for server-side errors (5xx)."""


def handle_api_errors(endpoint: str = "") -> Callable[[F], F]:
    """
    Decorator for consistent API error handling.

    Each call is attempted exactly once; requests exceptions are logged
    and re-raised as members of the APIError family.

    Args:
        endpoint: Label of the endpoint, attached to raised errors.

    Returns:
        Decorated function with error translation.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            func_name = func.__name__
            label = endpoint or func_name

            try:
                return func(*args, **kwargs)

            except requests.exceptions.HTTPError as exc:
                response = exc.response
                status_code = response.status_code if response is not None else None

                if status_code in (401, 403):
                    logger.error("[%s] Authentication error (HTTP %s)", label, status_code)
                    raise AuthenticationError(
                        f"Authentication failed: HTTP {status_code}",
                        status_code=status_code,
                        endpoint=label,
                    ) from exc

                if status_code == 429:
                    logger.error("[%s] Rate limit exceeded (HTTP 429)", label)
                    raise RateLimitError(
                        "Rate limit exceeded: HTTP 429",
                        status_code=status_code,
                        endpoint=label,
                    ) from exc

                if status_code is not None and status_code >= 500:
                    logger.error("[%s] Server error (HTTP %s)", label, status_code)
                    raise ServerError(
                        f"Server error: HTTP {status_code}",
                        status_code=status_code,
                        endpoint=label,
                    ) from exc

                logger.error("[%s] HTTP error %s", label, status_code)
                raise APIError(
                    f"HTTP error: {status_code}",
                    status_code=status_code,
                    endpoint=label,
                ) from exc

            except requests.exceptions.Timeout as exc:
                logger.error("[%s] Request timeout", label)
                raise APIError(
                    "Request timed out",
                    status_code="TIMEOUT",
                    endpoint=label,
                ) from exc

            except requests.exceptions.ConnectionError as exc:
                logger.error("[%s] Connection error: %s", label, exc)
                raise APIError(
                    f"Connection failed: {exc}",
                    status_code="CONNECTION_ERROR",
                    endpoint=label,
                ) from exc

            except APIError:
                raise

            except Exception as exc:
                logger.error(
                    "[%s] Unexpected error in %s: %s",
                    label,
                    func_name,
                    exc,
                    exc_info=True,
                )
                raise APIError(
                    f"Unexpected error in {func_name}: {exc}",
                    status_code="ERROR",
                    endpoint=label,
                ) from exc

        return wrapper  # type: ignore[return-value]

    return decorator


def handle_pipeline_phase(
    phase_name: str,
    error_cls: type[PipelinePhaseError] = PipelinePhaseError,
) -> Callable[[F], F]:
    """
    Decorator for structured error handling in pipeline phases.

    Wraps a function so that any unhandled exception is logged with
    phase context and re-raised as the specified PipelinePhaseError subclass.
    PipelinePhaseError and APIError instances are re-raised without wrapping.

    Args:
        phase_name: Human-readable name of the pipeline phase.
        error_cls: Exception class to raise on failure.

    Returns:
        Decorated function with structured error handling.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            func_name = func.__name__
            logger.info("[%s] Starting phase '%s'", phase_name, func_name)
            try:
                result = func(*args, **kwargs)
                logger.info(
                    "[%s] Completed phase '%s' successfully",
                    phase_name,
                    func_name,
                )
                return result
            except (PipelinePhaseError, APIError):
                raise
            except Exception as exc:
                logger.error(
                    "[%s] Error in '%s': %s",
                    phase_name,
                    func_name,
                    exc,
                    exc_info=True,
                )
                raise error_cls(
                    f"{phase_name} failed in {func_name}: {exc}",
                    details={"function": func_name, "original_error": str(exc)},
                ) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
