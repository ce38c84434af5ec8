"""Prompt state: messages, the chosen agent and generation options."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

_U8_MAX = 0xFF
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1
_U32_MAX = 2**32 - 1


class Role(IntEnum):
    """Author of a message; serialised as its integer value."""

    USER = 0
    ASSISTANT = 1
    SYSTEM = 2
    TOOL = 3
    UNKNOWN = 4


def role_from_int(value: int) -> Role:
    """Decode a role from a byte value; unrecognised values give UNKNOWN."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"role must be an integer, not {type(value).__name__}")
    if not 0 <= value <= _U8_MAX:
        raise ValueError(f"role value {value} is out of range for a byte")
    try:
        return Role(value)
    except ValueError:
        return Role.UNKNOWN


@dataclass
class Message:
    role: Role = Role.USER
    content: list[str] = field(default_factory=list)


@dataclass
class PromptOptions:
    temperature: float = 0.0
    num_context: int = 0
    num_batch: int = 0
    max_predict: int = 0
    top_k: int = 0
    top_p: float = 0.0
    seed: int = 0


@dataclass
class Prompt:
    messages: list[Message] = field(default_factory=list)
    agent: str = ""
    options: PromptOptions = field(default_factory=PromptOptions)


def default_prompt() -> Prompt:
    """The prompt the chat view starts with."""
    return Prompt(
        agent="tool_agent",
        options=PromptOptions(
            num_batch=20000,
            num_context=20000,
            max_predict=2000,
            top_k=20,
            top_p=0.9,
        ),
    )


def prompt_to_json(prompt: Prompt) -> str:
    """Serialise a prompt to compact JSON."""
    options = prompt.options
    document = {
        "messages": [
            {"role": int(message.role), "content": list(message.content)}
            for message in prompt.messages
        ],
        "agent": prompt.agent,
        "options": {
            "temperature": float(options.temperature),
            "num_context": options.num_context,
            "num_batch": options.num_batch,
            "max_predict": options.max_predict,
            "top_k": options.top_k,
            "top_p": float(options.top_p),
            "seed": options.seed,
        },
    }
    return json.dumps(document, separators=(",", ":"))


def prompt_from_json(text: str | bytes) -> Prompt:
    """Parse a prompt from JSON. Every field is required; extras are ignored."""
    data = json.loads(text)
    return Prompt(
        messages=[_message(item) for item in _list(_field(data, "messages"), "messages")],
        agent=_str(_field(data, "agent"), "agent"),
        options=_options(_field(data, "options")),
    )


def _field(obj: Any, key: str) -> Any:
    if not isinstance(obj, dict):
        raise ValueError(f"expected an object holding `{key}`")
    if key not in obj:
        raise ValueError(f"missing field `{key}`")
    return obj[key]


def _list(value: Any, name: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"`{name}` must be a list")
    return value


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"`{name}` must be a string")
    return value


def _int(value: Any, name: str, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"`{name}` must be an integer")
    if not low <= value <= high:
        raise ValueError(f"`{name}` value {value} is out of range")
    return value


def _float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"`{name}` must be a number")
    return float(value)


def _message(obj: Any) -> Message:
    raw_role = _field(obj, "role")
    try:
        role = role_from_int(raw_role)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc
    content = [_str(part, "content") for part in _list(_field(obj, "content"), "content")]
    return Message(role=role, content=content)


def _options(obj: Any) -> PromptOptions:
    return PromptOptions(
        temperature=_float(_field(obj, "temperature"), "temperature"),
        num_context=_int(_field(obj, "num_context"), "num_context", _I32_MIN, _I32_MAX),
        num_batch=_int(_field(obj, "num_batch"), "num_batch", _I32_MIN, _I32_MAX),
        max_predict=_int(_field(obj, "max_predict"), "max_predict", _I32_MIN, _I32_MAX),
        top_k=_int(_field(obj, "top_k"), "top_k", _I32_MIN, _I32_MAX),
        top_p=_float(_field(obj, "top_p"), "top_p"),
        seed=_int(_field(obj, "seed"), "seed", 0, _U32_MAX),
    )