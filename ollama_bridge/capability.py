"""Capabilities a model can declare."""

from __future__ import annotations

from enum import Enum


class Capability(str, Enum):
    INPUT_MESSAGES = "input-messages"
    INPUT_TEXT = "input-text"
    INPUT_IMAGE = "input-image"
    INPUT_AUDIO = "input-audio"
    INPUT_PDF = "input-pdf"
    INPUT_MULTIPLE = "input-multiple"
    OUTPUT_TEXT = "output-text"
    OUTPUT_STREAMING = "output-streaming"
    OUTPUT_STRUCTURED = "output-structured"
    TOOL_CALLING = "tool-calling"
    EMBEDDINGS = "embeddings"
    THINKING = "thinking"
