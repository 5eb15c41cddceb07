import json
from unittest.mock import MagicMock, patch

import groq
import httpx
import openai
import pytest

from program_advisor.errors import (
    ProviderDecodeError,
    ProviderNotConfigured,
    ProviderTransportError,
)
from program_advisor.llm.config import ProviderConfig
from program_advisor.llm.groq_provider import GroqAdapter
from program_advisor.llm.openai_provider import OpenAIAdapter
from program_advisor.llm.registry import build_adapters

GROQ_CONFIG = ProviderConfig(name="groq", api_key="test-key", model="llama-3.3-70b-versatile")
OPENAI_CONFIG = ProviderConfig(name="openai", api_key="test-key", model="gpt-4o-mini", timeout=15.0)
_REQUEST = httpx.Request("POST", "https://llm.example.test/v1/chat/completions")


def _mock_llm_response(content):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


# ── Groq ─────────────────────────────────────────────────────────────────


@patch("program_advisor.llm.groq_provider.Groq")
def test_groq_generate_returns_decoded_object(mock_groq_cls, make_questionnaire, valid_payload):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_llm_response(
        json.dumps(valid_payload)
    )

    result = GroqAdapter(GROQ_CONFIG).generate(make_questionnaire())

    assert result == valid_payload


@patch("program_advisor.llm.groq_provider.Groq")
def test_groq_request_uses_json_mode_and_profile(mock_groq_cls, make_questionnaire, valid_payload):
    create = mock_groq_cls.return_value.chat.completions.create
    create.return_value = _mock_llm_response(json.dumps(valid_payload))

    GroqAdapter(GROQ_CONFIG).generate(make_questionnaire(field_of_study=None))

    kwargs = create.call_args.kwargs
    assert kwargs["model"] == "llama-3.3-70b-versatile"
    assert kwargs["response_format"] == {"type": "json_object"}
    system, user = kwargs["messages"]
    assert system["role"] == "system"
    assert '"recommendedProgram"' in system["content"]
    assert "Education Level: Bachelor's Degree" in user["content"]
    assert "Field of Study: Not specified" in user["content"]


@patch("program_advisor.llm.groq_provider.Groq")
def test_groq_client_built_with_timeout_and_no_retries(mock_groq_cls, make_questionnaire, valid_payload):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_llm_response(
        json.dumps(valid_payload)
    )

    adapter = GroqAdapter(GROQ_CONFIG)
    adapter.generate(make_questionnaire())
    adapter.generate(make_questionnaire())

    mock_groq_cls.assert_called_once_with(
        api_key="test-key", base_url=None, timeout=GROQ_CONFIG.timeout, max_retries=0,
    )


@patch("program_advisor.llm.groq_provider.Groq")
def test_groq_connection_error_is_transport(mock_groq_cls, make_questionnaire):
    mock_groq_cls.return_value.chat.completions.create.side_effect = groq.APIConnectionError(
        request=_REQUEST
    )

    with pytest.raises(ProviderTransportError) as excinfo:
        GroqAdapter(GROQ_CONFIG).generate(make_questionnaire())

    assert excinfo.value.category == "transport"
    assert excinfo.value.provider == "groq"


@patch("program_advisor.llm.groq_provider.Groq")
def test_groq_bad_json_is_decode(mock_groq_cls, make_questionnaire):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_llm_response(
        "not valid json{{{"
    )

    with pytest.raises(ProviderDecodeError) as excinfo:
        GroqAdapter(GROQ_CONFIG).generate(make_questionnaire())

    assert excinfo.value.category == "decode"


@patch("program_advisor.llm.groq_provider.Groq")
def test_groq_disabled_is_not_configured(mock_groq_cls, make_questionnaire):
    config = ProviderConfig(name="groq", api_key="test-key", enabled=False)

    with pytest.raises(ProviderNotConfigured):
        GroqAdapter(config).generate(make_questionnaire())

    mock_groq_cls.assert_not_called()


# ── OpenAI ───────────────────────────────────────────────────────────────


@patch("program_advisor.llm.openai_provider.OpenAI")
def test_openai_generate_returns_decoded_object(mock_openai_cls, make_questionnaire, valid_payload):
    mock_openai_cls.return_value.chat.completions.create.return_value = _mock_llm_response(
        json.dumps(valid_payload)
    )

    result = OpenAIAdapter(OPENAI_CONFIG).generate(make_questionnaire())

    assert result == valid_payload
    mock_openai_cls.assert_called_once_with(
        api_key="test-key", base_url=None, timeout=15.0, max_retries=0,
    )


@patch("program_advisor.llm.openai_provider.OpenAI")
def test_openai_timeout_is_transport(mock_openai_cls, make_questionnaire):
    mock_openai_cls.return_value.chat.completions.create.side_effect = openai.APITimeoutError(
        request=_REQUEST
    )

    with pytest.raises(ProviderTransportError):
        OpenAIAdapter(OPENAI_CONFIG).generate(make_questionnaire())


@patch("program_advisor.llm.openai_provider.OpenAI")
def test_openai_error_status_is_transport(mock_openai_cls, make_questionnaire):
    response = httpx.Response(503, request=_REQUEST)
    mock_openai_cls.return_value.chat.completions.create.side_effect = openai.APIStatusError(
        "Service Unavailable", response=response, body=None,
    )

    with pytest.raises(ProviderTransportError):
        OpenAIAdapter(OPENAI_CONFIG).generate(make_questionnaire())


@pytest.mark.parametrize("content", [None, "", "   ", "[1, 2, 3]", '"just a string"'])
@patch("program_advisor.llm.openai_provider.OpenAI")
def test_openai_unusable_body_is_decode(mock_openai_cls, content, make_questionnaire):
    mock_openai_cls.return_value.chat.completions.create.return_value = _mock_llm_response(content)

    with pytest.raises(ProviderDecodeError):
        OpenAIAdapter(OPENAI_CONFIG).generate(make_questionnaire())


@patch("program_advisor.llm.openai_provider.OpenAI")
def test_openai_no_choices_is_decode(mock_openai_cls, make_questionnaire):
    response = MagicMock()
    response.choices = []
    mock_openai_cls.return_value.chat.completions.create.return_value = response

    with pytest.raises(ProviderDecodeError):
        OpenAIAdapter(OPENAI_CONFIG).generate(make_questionnaire())


def test_openai_missing_key_is_not_configured(make_questionnaire):
    with pytest.raises(ProviderNotConfigured):
        OpenAIAdapter(ProviderConfig(name="openai")).generate(make_questionnaire())


# ── Registry ─────────────────────────────────────────────────────────────


def test_build_adapters_keeps_priority_order():
    adapters = build_adapters([
        ProviderConfig(name="groq"),
        ProviderConfig(name="mystery"),
        ProviderConfig(name="openai"),
    ])

    assert [type(a) for a in adapters] == [GroqAdapter, OpenAIAdapter]
    assert [a.name for a in adapters] == ["groq", "openai"]
