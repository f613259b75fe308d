"""
Error types raised by the scoring core.

``ValidationError`` is the only error the engine raises on purpose: a
malformed or missing required input (non-finite feature value, non-positive
forecast horizon, discount outside 0–100).  Unknown strategy names, unknown
algorithm names and absent features never raise; they degrade to defaults.

The endpoint layer (``commerce_scoring.endpoints``) maps ``ValidationError``
to a 400-equivalent response and everything else to a generic 500.

Not to be confused with ``pydantic.ValidationError``, which signals a
malformed configuration or model construction.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when caller-supplied input is structurally invalid.

    Attributes:
        field: Name of the offending input field, when known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)
