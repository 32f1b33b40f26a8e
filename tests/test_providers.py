import base64
import json
from types import SimpleNamespace

import httpx
import openai
import pytest
from google.genai import errors as genai_errors

from scriptdna.config import Config
from scriptdna.errors import ConfigurationError, NetworkError, UpstreamError
from scriptdna.providers import GeminiProvider, ImagePart, LocalProvider, OpenAIProvider, TextPart
from scriptdna.providers.factory import get_provider
from scriptdna.providers.gemini import GeminiResponse


@pytest.fixture
def parts(png_bytes):
    return [ImagePart(data=png_bytes, mime_type="image/png"), TextPart(text="Analyze this person's style.")]


# --- Gemini ---


class FakeGeminiModels:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


def _gemini(models):
    return GeminiProvider(api_key="unused", default_model="gemini-test", client=SimpleNamespace(models=models))


def test_gemini_json_request(parts, png_bytes):
    models = FakeGeminiModels(result=SimpleNamespace(text='{"languageFeatures": []}'))

    response = _gemini(models).generate_json(parts, "SYSTEM")

    assert response.text() == '{"languageFeatures": []}'
    (call,) = models.calls
    assert call["model"] == "gemini-test"
    assert call["config"].system_instruction == "SYSTEM"
    assert call["config"].response_mime_type == "application/json"
    image, text = call["contents"]
    assert image.inline_data.data == png_bytes
    assert image.inline_data.mime_type == "image/png"
    assert text.text == "Analyze this person's style."


def test_gemini_text_request_has_no_json_mode():
    models = FakeGeminiModels(result=SimpleNamespace(text="# Script"))

    response = _gemini(models).generate_text([TextPart(text="prompt")], "SYSTEM", model="gemini-other")

    assert response.text() == "# Script"
    assert models.calls[0]["model"] == "gemini-other"
    assert models.calls[0]["config"].response_mime_type is None


@pytest.mark.parametrize(
    "result, expected",
    [
        (SimpleNamespace(text="plain"), "plain"),
        (SimpleNamespace(text=lambda: "called"), "called"),
        (SimpleNamespace(text=None), ""),
        (SimpleNamespace(), ""),
    ],
)
def test_gemini_response_adapter(result, expected):
    assert GeminiResponse(result).text() == expected


def _client_error(code, message, status):
    return genai_errors.ClientError(code, {"error": {"code": code, "message": message, "status": status}})


@pytest.mark.parametrize(
    "error, expected",
    [
        (_client_error(404, "models/gemini-test is not found", "NOT_FOUND"), UpstreamError),
        (_client_error(403, "Permission denied", "PERMISSION_DENIED"), ConfigurationError),
        (_client_error(400, "API key not valid. Please pass a valid API key.", "INVALID_ARGUMENT"), ConfigurationError),
        (_client_error(400, "Request contains an invalid argument.", "INVALID_ARGUMENT"), UpstreamError),
        (
            genai_errors.ServerError(503, {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}}),
            UpstreamError,
        ),
        (httpx.ConnectError("connection refused"), NetworkError),
        (httpx.ReadTimeout("timed out"), NetworkError),
    ],
)
def test_gemini_error_translation(parts, error, expected):
    provider = _gemini(FakeGeminiModels(error=error))

    with pytest.raises(expected):
        provider.generate_json(parts, "SYSTEM")


def test_gemini_missing_model_is_named(parts):
    provider = _gemini(FakeGeminiModels(error=_client_error(404, "not found", "NOT_FOUND")))

    with pytest.raises(UpstreamError, match="gemini-test"):
        provider.generate_json(parts, "SYSTEM")


# --- OpenAI ---

OPENAI_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _openai(completions, model="gpt-4o-mini"):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIProvider(api_key="unused", default_model=model, client=client)


def _status_error(cls, status):
    return cls("rejected", response=httpx.Response(status, request=OPENAI_REQUEST), body=None)


def test_openai_json_request(parts, png_bytes):
    completions = FakeCompletions(content="{}")

    response = _openai(completions).generate_json(parts, "SYSTEM")

    assert response.text() == "{}"
    (call,) = completions.calls
    assert call["response_format"] == {"type": "json_object"}
    assert call["temperature"] == 0.2
    system, user = call["messages"]
    assert system == {"role": "system", "content": "SYSTEM"}
    image, text = user["content"]
    assert image["image_url"]["url"] == "data:image/png;base64," + base64.b64encode(png_bytes).decode()
    assert text == {"type": "text", "text": "Analyze this person's style."}


def test_openai_skips_temperature_for_reasoning_models():
    completions = FakeCompletions(content="# Script")

    _openai(completions, model="o3-mini").generate_text([TextPart(text="prompt")], "SYSTEM")

    assert "temperature" not in completions.calls[0]
    assert "response_format" not in completions.calls[0]


def test_openai_null_content_is_empty_text():
    response = _openai(FakeCompletions(content=None)).generate_text([TextPart(text="p")], "SYSTEM")

    assert response.text() == ""


@pytest.mark.parametrize(
    "error, expected",
    [
        (openai.APIConnectionError(request=OPENAI_REQUEST), NetworkError),
        (openai.APITimeoutError(request=OPENAI_REQUEST), NetworkError),
        (_status_error(openai.AuthenticationError, 401), ConfigurationError),
        (_status_error(openai.PermissionDeniedError, 403), ConfigurationError),
        (_status_error(openai.NotFoundError, 404), UpstreamError),
        (_status_error(openai.InternalServerError, 500), UpstreamError),
    ],
)
def test_openai_error_translation(error, expected):
    provider = _openai(FakeCompletions(error=error))

    with pytest.raises(expected):
        provider.generate_text([TextPart(text="p")], "SYSTEM")


def test_openai_missing_model_is_named():
    provider = _openai(FakeCompletions(error=_status_error(openai.NotFoundError, 404)), model="gpt-gone")

    with pytest.raises(UpstreamError, match="gpt-gone"):
        provider.generate_text([TextPart(text="p")], "SYSTEM")


# --- Local (Ollama) ---


def _local(handler, base_url="http://127.0.0.1:11434"):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return LocalProvider(base_url=base_url, default_model="llava", client=client)


def test_local_ollama_json_request(parts, png_bytes):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"response": '{"languageFeatures": ["calm"]}'})

    response = _local(handler).generate_json(parts, "SYSTEM")

    assert response.text() == '{"languageFeatures": ["calm"]}'
    (request,) = seen
    assert request.url.path == "/api/generate"
    body = json.loads(request.content)
    assert body["model"] == "llava"
    assert body["system"] == "SYSTEM"
    assert body["format"] == "json"
    assert body["images"] == [base64.b64encode(png_bytes).decode()]
    assert body["prompt"] == "Analyze this person's style."


def test_local_openai_compatible_request():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "# Script"}}]})

    provider = _local(handler, base_url="http://localhost:1234")
    response = provider.generate_text([TextPart(text="prompt")], "SYSTEM")

    assert response.text() == "# Script"
    assert seen[0].url.path == "/v1/chat/completions"


def test_local_connection_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NetworkError):
        _local(handler).generate_text([TextPart(text="p")], "SYSTEM")


def test_local_missing_model_is_named():
    def handler(request):
        return httpx.Response(404, json={"error": "model 'llava' not found"})

    with pytest.raises(UpstreamError, match="llava"):
        _local(handler).generate_text([TextPart(text="p")], "SYSTEM")


def test_local_unexpected_shape_is_upstream_error():
    def handler(request):
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(UpstreamError):
        _local(handler, base_url="http://localhost:1234").generate_text([TextPart(text="p")], "SYSTEM")


def test_local_provider_is_keyless():
    assert LocalProvider.requires_api_key is False


# --- Factory ---


def test_factory_builds_local_provider():
    config = Config(llm_provider="local", local_llm_base_url="http://127.0.0.1:11434/")

    provider = get_provider(config)

    assert isinstance(provider, LocalProvider)
    assert provider.base_url == "http://127.0.0.1:11434"
    provider.close()


def test_factory_builds_gemini_provider():
    provider = get_provider(Config(llm_provider="gemini"), api_key="test-key")

    assert isinstance(provider, GeminiProvider)
    assert provider.name == "gemini"


def test_factory_builds_openai_provider():
    provider = get_provider(Config(llm_provider="openai"), api_key="sk-test")

    assert isinstance(provider, OpenAIProvider)
    provider.close()
