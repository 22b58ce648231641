"""Convert Ollama responses into typed results."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Union

from ..model import Model, Ollama
from ..result import (
    RawHttpResult,
    Result,
    StreamResult,
    TextResult,
    ToolCall,
    ToolCallResult,
    VectorResult,
)
from . import UnexpectedResponseError

USAGE_FIELDS = ("prompt_eval_count", "eval_count", "total_duration", "done_reason")


def _tool_calls(calls: list[dict[str, Any]]) -> ToolCallResult:
    tool_calls = []
    for index, call in enumerate(calls):
        function = call.get("function") or {}
        tool_calls.append(
            ToolCall(
                id=str(call.get("id", index)),
                name=function.get("name", ""),
                arguments=dict(function.get("arguments") or {}),
            )
        )
    return ToolCallResult(tool_calls)


class OllamaResultConverter:
    def supports(self, model: Model) -> bool:
        return isinstance(model, Ollama)

    def convert(self, result: RawHttpResult, options: Mapping[str, Any] | None = None) -> Result:
        options = options or {}
        if options.get("stream"):
            return StreamResult(self._convert_stream(result))

        data = result.get_data()
        if "embeddings" in data:
            return VectorResult([list(vector) for vector in data["embeddings"]])

        message = data.get("message")
        if not isinstance(message, Mapping):
            raise UnexpectedResponseError("Response does not contain message.")
        if "content" not in message:
            raise UnexpectedResponseError("Message does not contain content.")

        if message.get("tool_calls"):
            return _tool_calls(message["tool_calls"])

        metadata = {key: data[key] for key in USAGE_FIELDS if key in data}
        return TextResult(message["content"], metadata)

    def _convert_stream(self, result: RawHttpResult) -> Iterator[Union[str, ToolCallResult]]:
        for chunk in result.get_data_stream():
            message = chunk.get("message") or {}
            if message.get("tool_calls"):
                yield _tool_calls(message["tool_calls"])
                continue
            content = message.get("content") or chunk.get("response")
            if content:
                yield content
