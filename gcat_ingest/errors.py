"""Exceptions that abort a pipeline run. Per-record problems never raise."""

from __future__ import annotations

from typing import Optional


class PipelineError(Exception):
    pass


class NetworkError(PipelineError):
    """Non-2xx terminal HTTP status or a transport failure (status_code=None)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedInputError(PipelineError):
    pass


class OutputValidationError(PipelineError):
    """The assembled document broke a schema or consistency check."""
