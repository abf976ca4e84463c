"""Domain errors and failure typing."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class StageError(PipelineError):
    """Raised for stage failures; always fatal for the run."""

    error_code = "STAGE_ERROR"

    def __init__(self, message: str, *, stage: str | None = None, subject: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage
        self.subject = subject

    def with_context(self, *, stage: str, subject: str | None = None) -> "StageError":
        if self.stage is None:
            self.stage = stage
        if self.subject is None:
            self.subject = subject
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage is None:
            return message
        if self.subject is None:
            return f"[{self.stage}] {message}"
        return f"[{self.stage}: {self.subject}] {message}"


class FetchError(StageError):
    """Raised for non-success HTTP statuses and transport failures."""

    error_code = "FETCH_ERROR"


class RetryableFetchError(FetchError):
    pass


class SchemaError(StageError):
    """Raised when a JSON payload is missing a key or has the wrong type."""

    error_code = "SCHEMA_ERROR"


class MissingAttributeError(StageError):
    """Raised when a required HTML attribute is absent."""

    error_code = "MISSING_ATTRIBUTE"


class UnexpectedContentError(StageError):
    """Raised when page text matches no known layout."""

    error_code = "UNEXPECTED_CONTENT"

    def __init__(self, message: str, *, text: str, stage: str | None = None, subject: str | None = None) -> None:
        super().__init__(message, stage=stage, subject=subject)
        self.text = text
