"""Ollama model client."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..capability import Capability
from ..logging import get_logger
from ..model import Model, Ollama
from ..result import RawHttpResult
from ..structured_output import RESPONSE_FORMAT
from . import InvalidArgumentError, Payload

logger = get_logger("adapters.ollama")

CHAT_TOP_LEVEL_KEYS = frozenset(
    {
        "stream",
        "format",
        "keep_alive",
        "tools",
        "think",
        "logprobs",
        "top_logprobs",
    }
)

EMBED_TOP_LEVEL_KEYS = frozenset(
    {
        "truncate",
        "keep_alive",
        "dimensions",
    }
)


def normalize_ollama_options(
    options: Mapping[str, Any], top_level_keys: Iterable[str]
) -> dict[str, Any]:
    """Split a flat option bag into top-level fields and the nested ``options`` map.

    Keys listed in ``top_level_keys`` stay at the root of the request body.
    Everything else is moved under ``options``. When the caller already passed
    an ``options`` mapping it seeds the nested map first, and flat keys only
    fill entries that are still missing there.
    """
    top_level_keys = frozenset(top_level_keys)

    nested: dict[str, Any] = {}
    explicit = options.get("options")
    if isinstance(explicit, Mapping):
        nested.update(explicit)
    elif explicit is not None:
        logger.warning("Ignoring non-mapping 'options' value of type %s", type(explicit).__name__)

    top_level: dict[str, Any] = {}
    for key, value in options.items():
        if key == "options":
            continue
        if key in top_level_keys:
            top_level[key] = value
        elif key not in nested:
            nested[key] = value

    if nested:
        top_level["options"] = nested

    return top_level


class OllamaClient:
    """Send chat and embedding requests to an Ollama server."""

    def __init__(self, http_client: Any, host_url: str) -> None:
        self.http_client = http_client
        self.host_url = host_url.rstrip("/")

    def supports(self, model: Model) -> bool:
        return isinstance(model, Ollama)

    def request(
        self, model: Model, payload: Payload, options: Mapping[str, Any] | None = None
    ) -> RawHttpResult:
        options = dict(options or {})
        if model.supports(Capability.INPUT_MESSAGES):
            return self._completion_request(payload, options)
        if model.supports(Capability.EMBEDDINGS):
            return self._embeddings_request(model, payload, options)
        raise InvalidArgumentError(f'Unsupported model "{type(model).__name__}": "{model.name}".')

    def _completion_request(self, payload: Payload, options: dict[str, Any]) -> RawHttpResult:
        # Ollama streams by default
        options.setdefault("stream", False)

        response_format = options.get(RESPONSE_FORMAT)
        if isinstance(response_format, Mapping):
            json_schema = response_format.get("json_schema")
            schema = json_schema.get("schema") if isinstance(json_schema, Mapping) else None
            if schema is not None:
                options["format"] = schema
                del options[RESPONSE_FORMAT]
            elif response_format.get("type") == "json_object":
                options["format"] = "json"
                del options[RESPONSE_FORMAT]

        body = normalize_ollama_options(options, CHAT_TOP_LEVEL_KEYS)
        body.update(payload)

        url = f"{self.host_url}/api/chat"
        logger.debug("POST %s with top-level keys %s", url, sorted(body))
        response = self.http_client.request(
            "POST",
            url,
            headers={"Content-Type": "application/json"},
            json=body,
            stream=True,
        )
        return RawHttpResult(response)

    def _embeddings_request(
        self, model: Model, payload: Payload, options: dict[str, Any]
    ) -> RawHttpResult:
        body = normalize_ollama_options(options, EMBED_TOP_LEVEL_KEYS)
        body.update({"model": model.name, "input": payload})

        url = f"{self.host_url}/api/embed"
        logger.debug("POST %s with top-level keys %s", url, sorted(body))
        response = self.http_client.request("POST", url, json=body, stream=True)
        return RawHttpResult(response)
