class ComplianceAnalysisError(Exception):
    """Base class for failures inside the analysis pipeline."""


class EncodingError(ComplianceAnalysisError):
    """The image could not be read for encoding."""


class TransportError(ComplianceAnalysisError):
    """The Gemini call failed on the network or returned a non-2xx status."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class SchemaValidationError(ComplianceAnalysisError):
    """The model reply does not hold a usable compliance JSON object."""
