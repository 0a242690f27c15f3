"""Exceptions raised across the review and generation layers."""

from __future__ import annotations

from typing import Optional


class AdvisorError(Exception):
    """Base exception for review advisor errors."""


class RetrievalEmpty(AdvisorError):
    """The store returned no reviews, or none carried usable text."""


class _RemoteCallError(AdvisorError):
    service = "remote service"

    def __init__(self, status_code: Optional[int], body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"{self.service} call failed: {body}"
        else:
            message = f"{self.service} call failed ({status_code}): {body}"
        super().__init__(message)


class RetrievalFailed(_RemoteCallError):
    """Non-success response or transport error from the document store."""

    service = "Document store"


class GenerationFailed(_RemoteCallError):
    """Non-success response, malformed body or transport error from the generator."""

    service = "Generation"


class SessionTerminated(AdvisorError):
    """A turn was submitted to a conversation that has already ended."""
