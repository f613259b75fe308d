"""
Abstract base class for all endpoints.

Every endpoint follows the same contract:
  1. Receive the ``ServiceContext`` at construction.
  2. ``run(**kwargs)`` is the sole public API and never raises.
  3. ``run()`` calls ``_handle()`` and maps the outcome to a status code:
       200  ``_handle()`` returned an envelope
       400  ``ValidationError`` (message passed through to the caller)
       500  anything else (generic message; details only in the log)
  4. Request fields are bound against ``_handle()``'s signature first; a
     missing required field or an unknown field is a ``ValidationError``.
  5. ``_handle()`` validates transport-side bounds and calls the engines.

Log records carry ``endpoint`` (and ``status_code`` once known) as extra
fields, so the JSON log format emits them as top-level keys.

The engines never log or catch on behalf of their caller; this layer is
where failures become responses and log records.

Usage::

    class EchoEndpoint(Endpoint):
        endpoint_name = "echo"

        def _handle(self, text: str) -> SentimentEnvelope:
            ...

    response = EchoEndpoint(context).run(text="hello")
    response.status_code   # 200
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel

from commerce_scoring.context import ServiceContext
from commerce_scoring.errors import ValidationError

logger = logging.getLogger(__name__)

STATUS_OK = 200
STATUS_BAD_REQUEST = 400
STATUS_SERVER_ERROR = 500

INTERNAL_ERROR_MESSAGE = "Internal server error."


@dataclass(frozen=True)
class EndpointResponse:
    """Transport-agnostic response: a status code plus an envelope or error."""

    status_code: int
    body:        Optional[BaseModel] = None
    error:       Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == STATUS_OK

    def to_dict(self) -> dict[str, Any]:
        if self.body is not None:
            return self.body.model_dump(mode="json")
        return {"error": self.error}


class Endpoint(ABC):
    """Abstract base for all endpoints.

    Subclasses must:
      1. Set the ``endpoint_name`` class variable.
      2. Implement ``_handle(**kwargs) -> BaseModel``.
    """

    endpoint_name: str  # Override in subclass

    def __init__(self, context: ServiceContext) -> None:
        self.context = context
        self.config = context.config

    def run(self, **kwargs: Any) -> EndpointResponse:
        """Handle one request.

        Returns:
            ``EndpointResponse`` with status 200, 400 or 500.
        """
        logger.info(
            "Endpoint [%s] request | %s", self.endpoint_name, _describe(kwargs),
            extra={"endpoint": self.endpoint_name},
        )
        try:
            self._check_fields(kwargs)
            body = self._handle(**kwargs)
        except ValidationError as exc:
            logger.warning(
                "Endpoint [%s] rejected request: %s", self.endpoint_name, exc,
                extra={"endpoint": self.endpoint_name, "status_code": STATUS_BAD_REQUEST},
            )
            return EndpointResponse(status_code=STATUS_BAD_REQUEST, error=str(exc))
        except Exception:
            logger.exception(
                "Endpoint [%s] FAILED", self.endpoint_name,
                extra={"endpoint": self.endpoint_name, "status_code": STATUS_SERVER_ERROR},
            )
            return EndpointResponse(
                status_code=STATUS_SERVER_ERROR, error=INTERNAL_ERROR_MESSAGE,
            )

        logger.info(
            "Endpoint [%s] completed | status=%d", self.endpoint_name, STATUS_OK,
            extra={"endpoint": self.endpoint_name, "status_code": STATUS_OK},
        )
        return EndpointResponse(status_code=STATUS_OK, body=body)

    def _check_fields(self, kwargs: dict[str, Any]) -> None:
        """Match request fields against ``_handle``'s parameters.

        Raises:
            ValidationError: If a required field is missing or an unknown
                field is present.
        """
        signature = inspect.signature(self._handle)
        try:
            signature.bind(**kwargs)
        except TypeError:
            missing = [
                name for name, param in signature.parameters.items()
                if param.default is param.empty
                and param.kind in (param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY)
                and name not in kwargs
            ]
            if missing:
                raise ValidationError(
                    f"missing required field(s): {', '.join(missing)}.", field=missing[0],
                ) from None
            unknown = sorted(set(kwargs) - set(signature.parameters))
            raise ValidationError(
                f"unexpected field(s): {', '.join(unknown)}.",
                field=unknown[0] if unknown else None,
            ) from None

    @abstractmethod
    def _handle(self, **kwargs: Any) -> BaseModel:
        """Endpoint-specific implementation.

        Raises:
            ValidationError: For requests outside transport-side bounds.
        """
        ...


# ── Request validation helpers ────────────────────────────────────────────────


def require_int(
    value: Any,
    field: str,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    """Return ``value`` as an int within ``[minimum, maximum]``.

    Raises:
        ValidationError: If ``value`` is not an integer or is out of range.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer, got {value!r}.", field=field)
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field} must be >= {minimum}, got {value}.", field=field)
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field} must be <= {maximum}, got {value}.", field=field)
    return value


def require_limit(value: Optional[int], default: int, maximum: int) -> int:
    """A list size in ``[1, maximum]``; ``None`` selects ``default``."""
    if value is None:
        return default
    return require_int(value, "limit", 1, maximum)


def require_text(value: Any, field: str) -> str:
    """Non-empty text after stripping.

    Raises:
        ValidationError: If ``value`` is not a string or is blank.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string.", field=field)
    return value


def _describe(kwargs: dict[str, Any]) -> str:
    parts = []
    for key, value in kwargs.items():
        text = repr(value)
        parts.append(f"{key}={text if len(text) <= 40 else text[:37] + '...'}")
    return " ".join(parts) or "-"
