"""Result types returned by the platform."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Union

import requests

if TYPE_CHECKING:
    from .adapters import ResultConverter


class RawHttpResult:
    """Thin wrapper around an unconsumed transport response."""

    def __init__(self, response: requests.Response) -> None:
        self.response = response

    def get_object(self) -> requests.Response:
        return self.response

    def get_data(self) -> dict[str, Any]:
        return self.response.json()

    def get_data_stream(self) -> Iterator[dict[str, Any]]:
        """Yield JSON chunks from a newline-delimited or ``data:`` framed body."""
        for line in self.response.iter_lines(decode_unicode=True):
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            line = line.strip()
            if line.startswith("data:"):
                line = line[len("data:"):].strip()
            if not line or line == "[DONE]":
                continue
            yield json.loads(line)


@dataclass
class TextResult:
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolCall:
    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolCallResult:
    tool_calls: list[ToolCall]


@dataclass
class VectorResult:
    vectors: list[list[float]]


@dataclass
class StreamResult:
    content: Iterator[Union[str, ToolCallResult]]

    def __iter__(self) -> Iterator[Union[str, ToolCallResult]]:
        return iter(self.content)


Result = Union[TextResult, ToolCallResult, VectorResult, StreamResult]


class DeferredResult:
    """Convert a raw result on first access and keep the outcome."""

    def __init__(
        self,
        converter: "ResultConverter",
        raw_result: RawHttpResult,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self.converter = converter
        self.raw_result = raw_result
        self.options = dict(options or {})
        self._result: Result | None = None

    def get_result(self) -> Result:
        if self._result is None:
            self._result = self.converter.convert(self.raw_result, self.options)
        return self._result

    def as_text(self) -> str:
        result = self.get_result()
        if not isinstance(result, TextResult):
            raise TypeError(f"Expected TextResult, got {type(result).__name__}.")
        return result.content

    def as_vectors(self) -> list[list[float]]:
        result = self.get_result()
        if not isinstance(result, VectorResult):
            raise TypeError(f"Expected VectorResult, got {type(result).__name__}.")
        return result.vectors

    def as_stream(self) -> Iterator[Union[str, ToolCallResult]]:
        result = self.get_result()
        if not isinstance(result, StreamResult):
            raise TypeError(f"Expected StreamResult, got {type(result).__name__}.")
        return iter(result)
