"""Error hierarchy for the shaping pipeline.

Callers can tell three failure families apart:

- ``ConfigurationError``: the local setup is wrong (missing API key, bad config).
- ``UnexpectedStatusCodeError``: the remote service rejected the call.
- ``TransportError``: the network exchange itself failed.

Everything else is a local defect (``EncodeError``, ``ResponseOptimizeError``)
or a body the service sent that could not be decoded (``MalformedBodyError``).
"""


class ShaperError(RuntimeError):
    pass


class ConfigurationError(ShaperError):
    """Raised when configuration or credentials are missing or invalid."""


class EncodeError(ShaperError):
    """Raised when a completion request cannot be serialized."""


class TransportError(ShaperError):
    """Raised when the HTTP exchange fails before a status code is available."""


class CancelledError(TransportError):
    """Raised when an in-flight exchange is aborted by its cancel signal."""


class UnexpectedStatusCodeError(ShaperError):
    """Raised for any response status above 299."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"unexpected status code: {status_code} '{message}'")


class MalformedBodyError(ShaperError):
    """Raised when a response body is not the JSON shape we expect."""


class MalformedSuccessBodyError(MalformedBodyError):
    pass


class MalformedErrorBodyError(MalformedBodyError):
    pass


class ResponseOptimizeError(ShaperError):
    """Raised when response post-processing cannot run (e.g. bad pattern)."""
