"""
Error taxonomy for LegalEase.

Extraction failures are user-visible and terminal for a request. Backend and
parse failures are recovered locally by the fallback tiers in
``legalease.services.fallback`` and never reach the caller.
"""


class LegalEaseError(Exception):
    """Base class for all LegalEase errors."""


# =============================================================================
# Extraction
# =============================================================================


class ExtractionFailure(LegalEaseError):
    """The uploaded document could not be turned into text."""


class UnsupportedFormat(ExtractionFailure):
    """The document's MIME type has no registered extractor."""

    def __init__(self, mime_type: str | None):
        self.mime_type = mime_type
        super().__init__(f"Unsupported file format: {mime_type}")


class ExtractionFailed(ExtractionFailure):
    """The extractor ran but produced no usable text."""


# =============================================================================
# Generative backend
# =============================================================================


class BackendFailure(LegalEaseError):
    """The generative backend was unreachable, timed out, or refused the call."""


class ParseFailure(LegalEaseError):
    """No valid structured payload could be recovered from a backend response."""

    def __init__(self, message: str, raw_text: str | None = None):
        self.raw_text = raw_text
        super().__init__(message)
