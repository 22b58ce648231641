"""Platform facade and factory helpers."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import requests

from .adapters import InvalidArgumentError, ModelClient, Payload, ResultConverter
from .adapters.ollama import OllamaClient
from .adapters.ollama_converter import OllamaResultConverter
from .logging import get_logger
from .model import ModelCatalog
from .result import DeferredResult

logger = get_logger("platform")


class Platform:
    """Dispatch an invocation to the client and converter that support the model."""

    def __init__(
        self,
        clients: Iterable[ModelClient],
        converters: Iterable[ResultConverter],
        catalog: ModelCatalog | None = None,
    ) -> None:
        self.clients = list(clients)
        self.converters = list(converters)
        self.catalog = catalog or ModelCatalog()

    def invoke(
        self, model_name: str, payload: Payload, options: Mapping[str, Any] | None = None
    ) -> DeferredResult:
        model = self.catalog.get_model(model_name)
        merged = {**model.options, **(options or {})}

        client = next((c for c in self.clients if c.supports(model)), None)
        if client is None:
            raise InvalidArgumentError(f'No model client registered for model "{model.name}".')
        converter = next((c for c in self.converters if c.supports(model)), None)
        if converter is None:
            raise InvalidArgumentError(f'No result converter registered for model "{model.name}".')

        logger.debug("Invoking %s via %s", model.name, type(client).__name__)
        raw_result = client.request(model, payload, merged)
        return DeferredResult(converter, raw_result, merged)


def create_platform(
    host_url: str,
    http_client: Any | None = None,
    catalog: ModelCatalog | None = None,
) -> Platform:
    """Build a platform that talks to the Ollama server at ``host_url``."""
    client = OllamaClient(http_client or requests.Session(), host_url)
    return Platform([client], [OllamaResultConverter()], catalog)
