"""End-to-end scenarios: store -> resolver -> client -> result."""

from __future__ import annotations

import pytest

from adapters.settings_stores import MappingSettingsStore
from conftest import API_KEY, completion_body
from core.config import DEFAULT_MODEL, DEFAULT_PROMPT
from core.domain.errors import ApiError, MalformedResponseError, MissingApiKeyError
from core.services.summarize_pipeline import HELLO_MESSAGE, hello, summarize_text


def test_hello() -> None:
    assert hello() == HELLO_MESSAGE == "Hello, pg_summarize"


def test_scenario_a_defaults_and_success(make_client, store) -> None:
    client, transport = make_client(json_body=completion_body("A fox."))

    result = summarize_text("The quick brown fox", store=store, client=client)

    assert result == "A fox."
    assert transport.last_json == {
        "model": DEFAULT_MODEL,
        "messages": [
            {"role": "system", "content": DEFAULT_PROMPT},
            {"role": "user", "content": "<text>The quick brown fox</text>"},
        ],
    }
    assert transport.requests[0].headers["Authorization"] == f"Bearer {API_KEY}"


def test_scenario_b_missing_api_key_makes_no_network_call(make_client) -> None:
    client, transport = make_client(json_body=completion_body("never"))

    with pytest.raises(MissingApiKeyError):
        summarize_text("The quick brown fox", store=MappingSettingsStore(), client=client)

    assert transport.requests == []


def test_scenario_c_unauthorized(make_client, store) -> None:
    client, _ = make_client(status_code=401)

    with pytest.raises(ApiError) as info:
        summarize_text("The quick brown fox", store=store, client=client)

    assert info.value.status_code == 401


def test_scenario_d_unexpected_shape(make_client, store) -> None:
    client, _ = make_client(json_body={"unexpected": "shape"})

    with pytest.raises(MalformedResponseError):
        summarize_text("The quick brown fox", store=store, client=client)


def test_each_call_resolves_settings_again(make_client) -> None:
    values = {"pg_summarizer.api_key": API_KEY, "pg_summarizer.model": "first-model"}

    class _LiveStore:
        def get_setting(self, name: str) -> str | None:
            return values.get(name)

    client, transport = make_client(json_body=completion_body("ok"))

    summarize_text("one", store=_LiveStore(), client=client)
    values["pg_summarizer.model"] = "second-model"
    summarize_text("two", store=_LiveStore(), client=client)

    assert len(transport.requests) == 2
    assert transport.last_json["model"] == "second-model"
