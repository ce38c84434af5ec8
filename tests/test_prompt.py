import json

import pytest

from hayride.prompt import (
    Message,
    Prompt,
    PromptOptions,
    Role,
    default_prompt,
    prompt_from_json,
    prompt_to_json,
    role_from_int,
)


@pytest.mark.parametrize("role", list(Role))
def test_role_from_int_round_trip(role):
    assert role_from_int(role.value) is role


def test_role_from_int_unknown_value():
    assert role_from_int(200) is Role.UNKNOWN


@pytest.mark.parametrize("value", [256, -1])
def test_role_from_int_out_of_byte_range(value):
    with pytest.raises(ValueError):
        role_from_int(value)


def test_role_from_int_rejects_non_integer():
    with pytest.raises(TypeError):
        role_from_int("1")


def test_default_prompt_values():
    prompt = default_prompt()
    assert prompt.agent == "tool_agent"
    assert prompt.messages == []
    assert prompt.options.num_batch == 20000
    assert prompt.options.num_context == 20000
    assert prompt.options.max_predict == 2000
    assert prompt.options.top_k == 20
    assert prompt.options.top_p == pytest.approx(0.9)
    assert prompt.options.temperature == 0.0


def test_default_prompts_are_independent():
    first = default_prompt()
    second = default_prompt()
    first.messages.append(Message(content=["hi"]))
    assert second.messages == []


def test_empty_prompt_json():
    assert prompt_to_json(Prompt()) == (
        '{"messages":[],"agent":"","options":{"temperature":0.0,"num_context":0,'
        '"num_batch":0,"max_predict":0,"top_k":0,"top_p":0.0,"seed":0}}'
    )


def test_role_serialised_as_integer():
    prompt = Prompt(messages=[Message(role=Role.ASSISTANT, content=["ok"])])
    data = json.loads(prompt_to_json(prompt))
    assert data["messages"][0]["role"] == Role.ASSISTANT.value
    assert data["messages"][0]["content"] == ["ok"]


def test_round_trip_default_prompt():
    prompt = default_prompt()
    assert prompt_from_json(prompt_to_json(prompt)) == prompt


def test_round_trip_with_messages():
    prompt = Prompt(
        messages=[
            Message(role=Role.SYSTEM, content=["be brief"]),
            Message(role=Role.USER, content=["hello", "again"]),
            Message(role=Role.TOOL, content=[]),
        ],
        agent="agent",
        options=PromptOptions(temperature=0.5, seed=42, top_k=3),
    )
    assert prompt_from_json(prompt_to_json(prompt)) == prompt


def test_from_json_unknown_role_value():
    text = prompt_to_json(Prompt(messages=[Message(content=["x"])])).replace(
        '"role":0', '"role":9'
    )
    assert prompt_from_json(text).messages[0].role is Role.UNKNOWN


def test_from_json_ignores_extra_fields():
    data = json.loads(prompt_to_json(default_prompt()))
    data["system"] = "ignored"
    assert prompt_from_json(json.dumps(data)) == default_prompt()


def test_from_json_missing_field():
    data = json.loads(prompt_to_json(default_prompt()))
    del data["agent"]
    with pytest.raises(ValueError, match="agent"):
        prompt_from_json(json.dumps(data))


def test_from_json_wrong_type():
    data = json.loads(prompt_to_json(default_prompt()))
    data["options"]["num_batch"] = "many"
    with pytest.raises(ValueError, match="num_batch"):
        prompt_from_json(json.dumps(data))


def test_from_json_negative_seed():
    data = json.loads(prompt_to_json(default_prompt()))
    data["options"]["seed"] = -1
    with pytest.raises(ValueError, match="seed"):
        prompt_from_json(json.dumps(data))


def test_from_json_invalid_json():
    with pytest.raises(ValueError):
        prompt_from_json("{not json")