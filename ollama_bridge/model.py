"""Model descriptors and the Ollama model catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .adapters import InvalidArgumentError
from .capability import Capability


@dataclass(frozen=True)
class Model:
    """A named model together with the capabilities it declares."""

    name: str
    capabilities: frozenset[Capability] = field(default_factory=frozenset)
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise InvalidArgumentError("Model name cannot be empty.")
        object.__setattr__(self, "capabilities", frozenset(self.capabilities))
        object.__setattr__(self, "options", dict(self.options))

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities


@dataclass(frozen=True)
class Ollama(Model):
    """A model served by an Ollama instance."""


CHAT_CAPABILITIES = frozenset(
    {
        Capability.INPUT_MESSAGES,
        Capability.OUTPUT_TEXT,
        Capability.OUTPUT_STREAMING,
        Capability.OUTPUT_STRUCTURED,
    }
)
TOOL_CAPABILITIES = CHAT_CAPABILITIES | {Capability.TOOL_CALLING}
THINKING_CAPABILITIES = TOOL_CAPABILITIES | {Capability.THINKING}
VISION_CAPABILITIES = CHAT_CAPABILITIES | {Capability.INPUT_IMAGE}
EMBEDDING_CAPABILITIES = frozenset(
    {Capability.INPUT_TEXT, Capability.INPUT_MULTIPLE, Capability.EMBEDDINGS}
)

KNOWN_MODELS: dict[str, frozenset[Capability]] = {
    "deepseek-r1": THINKING_CAPABILITIES,
    "gemma3": VISION_CAPABILITIES,
    "gpt-oss": THINKING_CAPABILITIES,
    "llama3": CHAT_CAPABILITIES,
    "llama3.1": TOOL_CAPABILITIES,
    "llama3.2": TOOL_CAPABILITIES,
    "llava": VISION_CAPABILITIES,
    "mistral": TOOL_CAPABILITIES,
    "qwen2.5": TOOL_CAPABILITIES,
    "qwen2.5-coder": TOOL_CAPABILITIES,
    "qwen3": THINKING_CAPABILITIES,
    "all-minilm": EMBEDDING_CAPABILITIES,
    "bge-m3": EMBEDDING_CAPABILITIES,
    "embeddinggemma": EMBEDDING_CAPABILITIES,
    "mxbai-embed-large": EMBEDDING_CAPABILITIES,
    "nomic-embed-text": EMBEDDING_CAPABILITIES,
}


class ModelCatalog:
    """Resolve model names to :class:`Ollama` descriptors.

    Names are looked up without their ``:tag`` suffix, so ``llama3.2:3b``
    resolves like ``llama3.2``. Unknown names are classified by a simple
    heuristic: anything mentioning ``embed`` is an embedding model, the rest
    are chat models.
    """

    def __init__(self, models: Mapping[str, Iterable[Capability]] | None = None) -> None:
        source = KNOWN_MODELS if models is None else models
        self.models = {name: frozenset(caps) for name, caps in source.items()}

    def get_model(self, name: str, options: Mapping[str, Any] | None = None) -> Ollama:
        base = name.split(":", 1)[0]
        capabilities = self.models.get(name) or self.models.get(base)
        if capabilities is None:
            capabilities = EMBEDDING_CAPABILITIES if "embed" in base else CHAT_CAPABILITIES
        return Ollama(name, capabilities, options or {})
