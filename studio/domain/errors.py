"""Error taxonomy shared by the coach and ad studio flows.

Top-level errors (InvalidInput, BackendRequestFailure, MalformedResponse,
BatchPartialFailure) are caught at the route boundary and rendered as a
user-facing message. LeafEnrichmentFailure is only ever logged.
"""
from __future__ import annotations
from typing import Any, Optional


class StudioError(Exception):
    """Base class for errors that end a top-level flow."""
    status_code = 500
    user_message = "Ha ocurrido un error inesperado. Por favor, inténtalo de nuevo."

    def __init__(self, message: str = ""):
        super().__init__(message or self.user_message)
        self.message = message or self.user_message

    def to_dict(self) -> dict:
        return {"error": self.user_message}


class InvalidInput(StudioError):
    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
        # validation messages are written for the user already
        self.user_message = message


class BackendRequestFailure(StudioError):
    status_code = 502
    user_message = "No se pudo contactar con el servicio de generación. Por favor, inténtalo de nuevo."


class MalformedResponse(StudioError):
    """The structured-plan text could not be decoded into a Plan.

    ``raw_text`` is kept for diagnostics only and never shown to the user.
    """
    status_code = 502
    user_message = "La respuesta del modelo no tenía el formato esperado. Por favor, inténtalo de nuevo."

    def __init__(self, raw_text: str, reason: str = ""):
        super().__init__(reason or "malformed structured response")
        self.raw_text = raw_text
        self.reason = reason


class BatchPartialFailure(StudioError):
    """One format of an ad batch came back empty (or failed); nothing is published."""
    status_code = 502

    def __init__(self, format_label: str, reason: str = "empty"):
        super().__init__(f"No se pudo generar la imagen para el formato {format_label}.")
        self.format_label = format_label
        self.reason = reason
        self.user_message = (
            f"Hubo un error al generar las imágenes: {self.message} Por favor, inténtalo de nuevo."
        )


class GenerationSuperseded(StudioError):
    """A newer plan request started while this one was waiting on the backend."""
    status_code = 409
    user_message = "Se ha iniciado una generación más reciente; este plan se ha descartado."


class LeafEnrichmentFailure(Exception):
    """A single exercise image request failed.

    reason is "empty" when the backend answered without an image payload and
    "backend" when the request itself raised.
    """
    EMPTY = "empty"
    BACKEND = "backend"

    def __init__(self, address: Any, reason: str, detail: str = ""):
        super().__init__(f"enrichment failed for {address}: {reason} {detail}".strip())
        self.address = address
        self.reason = reason
        self.detail = detail


__all__ = [
    "StudioError", "InvalidInput", "BackendRequestFailure", "MalformedResponse",
    "BatchPartialFailure", "GenerationSuperseded", "LeafEnrichmentFailure",
]
