"""Chat exchanges: building generate requests and reading their responses."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable, Mapping, MutableSequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from hayride.prompt import Prompt, Role

SYSTEM_PROMPT = "You are a helpful AI assistant."
TEXT_CONTENT_TYPE = "text"


@dataclass
class ChatMessage:
    """One turn in the chat view: what was sent and, once known, the reply."""

    sent: str
    response: str | None = None

    @property
    def pending(self) -> bool:
        """True while no response has arrived."""
        return self.response is None


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_f32(value: float) -> str:
    """Shortest decimal text that reads back as the same single-precision value."""
    single = _to_f32(float(value))
    if math.isnan(single):
        return "NaN"
    if math.isinf(single):
        return "inf" if single > 0 else "-inf"
    text = repr(single)
    for precision in range(1, 10):
        candidate = f"{single:.{precision}g}"
        if _to_f32(float(candidate)) == single:
            text = candidate
            break
    formatted = format(Decimal(text), "f")
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


def prompt_metadata(prompt: Prompt) -> list[tuple[str, str]]:
    """The generation options of *prompt* as ordered name/value text pairs."""
    options = prompt.options
    return [
        ("temperature", _format_f32(options.temperature)),
        ("num_context", str(options.num_context)),
        ("num_batch", str(options.num_batch)),
        ("max_predict", str(options.max_predict)),
        ("top_k", str(options.top_k)),
        ("top_p", _format_f32(options.top_p)),
        ("seed", str(options.seed)),
        ("agent", prompt.agent),
    ]


def build_generate_request(prompt: Prompt, text: str) -> dict[str, Any]:
    """Build the JSON-ready generate request for a user message.

    The agent doubles as the model name. Raises ValueError for empty text,
    which is never sent.
    """
    if not text:
        raise ValueError("cannot send an empty message")
    message = {
        "role": int(Role.USER),
        "content": [{"text": {"text": text, "content_type": TEXT_CONTENT_TYPE}}],
    }
    return {
        "data": {
            "generate": {
                "model": prompt.agent,
                "system": SYSTEM_PROMPT,
                "messages": [message],
            }
        },
        "metadata": [[name, value] for name, value in prompt_metadata(prompt)],
    }


def _first_text(message: Mapping[str, Any]) -> str | None:
    for item in message.get("content", ()):
        if isinstance(item, Mapping) and "text" in item:
            body = item["text"]
            if isinstance(body, Mapping):
                body = body.get("text")
            if isinstance(body, str):
                return body
    return None


def concatenate_response(messages: Iterable[Mapping[str, Any]]) -> str:
    """Join the first text content of each message with single spaces.

    Messages without any text content are skipped.
    """
    texts = (_first_text(message) for message in messages)
    return " ".join(text for text in texts if text is not None)


def record_response(
    messages: MutableSequence[ChatMessage], response: Mapping[str, Any]
) -> str:
    """Store the text of a generate *response* on the last chat message.

    Returns the text. Raises RuntimeError when the response carries an
    error and ValueError when it holds something other than messages.
    """
    error = response.get("error") or ""
    if error:
        raise RuntimeError(f"Error in response: {error}")

    data = response.get("data")
    if not isinstance(data, Mapping) or not isinstance(data.get("messages"), list):
        raise ValueError("Unexpected data type")

    text = concatenate_response(data["messages"])
    if messages:
        messages[-1].response = text
    return text