from __future__ import annotations


class ServiceError(RuntimeError):
    """Base class for service-layer errors."""

    code = "service_error"


class InvalidInput(ServiceError, ValueError):
    """Bad item name, quantity or delta supplied by the caller."""

    code = "invalid_input"


class StoreUnavailable(ServiceError):
    """The document store could not be read or written."""

    code = "store_unavailable"


class GenerationFailed(ServiceError):
    """The text-generation call failed or returned an unexpected shape."""

    code = "generation_failed"
