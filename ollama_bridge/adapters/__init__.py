"""Model client and result converter protocols for ollama-bridge."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, Sequence, Union

if TYPE_CHECKING:
    from ..model import Model
    from ..result import RawHttpResult, Result

Payload = Union[Mapping[str, Any], Sequence[Any], str]


class PlatformError(RuntimeError):
    """Base class for errors raised by ollama-bridge."""


class InvalidArgumentError(PlatformError, ValueError):
    """Raised when a model or argument cannot be handled."""


class UnexpectedResponseError(PlatformError):
    """Raised when a response body lacks the fields a result needs."""


class ModelClient(Protocol):
    """Issue the HTTP request for a model."""

    def supports(self, model: "Model") -> bool:
        ...

    def request(
        self, model: "Model", payload: Payload, options: Mapping[str, Any] | None = None
    ) -> "RawHttpResult":
        ...


class ResultConverter(Protocol):
    """Turn a raw HTTP result into a typed result."""

    def supports(self, model: "Model") -> bool:
        ...

    def convert(self, result: "RawHttpResult", options: Mapping[str, Any] | None = None) -> "Result":
        ...
