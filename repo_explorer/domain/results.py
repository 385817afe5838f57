"""Typed fetch outcomes returned by the GitHub client."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

INVALID_INPUT = "invalid_input"
NOT_FOUND = "not_found"
RATE_LIMITED = "rate_limited"
TRANSPORT = "transport"
SUPERSEDED = "superseded"

USERNAME_REQUIRED_MESSAGE = "Username is required"
INVALID_USERNAME_MESSAGE = "Invalid GitHub username format"
NOT_FOUND_MESSAGE = "User not found"
RATE_LIMITED_MESSAGE = "GitHub rate limit reached. Try again later."
SUPERSEDED_MESSAGE = "Request superseded by a newer search"


@dataclass(frozen=True)
class FetchError:
    """A failed fetch, with a message suitable for showing to the user."""
    
    kind: str
    message: str
    status_code: Optional[int] = None
    
    @classmethod
    def invalid_input(cls, message: str = USERNAME_REQUIRED_MESSAGE) -> "FetchError":
        return cls(INVALID_INPUT, message)
    
    @classmethod
    def not_found(cls) -> "FetchError":
        return cls(NOT_FOUND, NOT_FOUND_MESSAGE, 404)
    
    @classmethod
    def rate_limited(cls) -> "FetchError":
        return cls(RATE_LIMITED, RATE_LIMITED_MESSAGE, 403)
    
    @classmethod
    def transport(cls, message: str, status_code: Optional[int] = None) -> "FetchError":
        return cls(TRANSPORT, message, status_code)
    
    @classmethod
    def superseded(cls) -> "FetchError":
        return cls(SUPERSEDED, SUPERSEDED_MESSAGE)


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Either a fetched value or a FetchError, never both."""
    
    value: Optional[T] = None
    error: Optional[FetchError] = None
    
    @property
    def ok(self) -> bool:
        return self.error is None
    
    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)
    
    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult[T]":
        return cls(error=error)
