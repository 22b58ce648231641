import pytest

from ollama_bridge.adapters import InvalidArgumentError
from ollama_bridge.capability import Capability
from ollama_bridge.model import ModelCatalog
from ollama_bridge.platform import Platform, create_platform
from ollama_bridge.result import StreamResult, TextResult
from ollama_bridge.structured_output import RESPONSE_FORMAT, build_response_format

HOST = "http://127.0.0.1:1234"
PAYLOAD = {"model": "llama3.2", "messages": [{"role": "user", "content": "Say hello world"}]}


def test_invoke_returns_text(http_client, chat_response):
    http_client.responses.append(chat_response("Hello world"))
    platform = create_platform(HOST, http_client)

    deferred = platform.invoke("llama3.2", PAYLOAD)

    assert deferred.as_text() == "Hello world"
    assert http_client.request_count == 1
    assert http_client.requests[0]["json"]["stream"] is False


def test_result_is_converted_once(http_client, chat_response):
    http_client.responses.append(chat_response())
    deferred = create_platform(HOST, http_client).invoke("llama3.2", PAYLOAD)

    assert deferred.get_result() is deferred.get_result()


def test_streaming_is_supported(http_client, fake_response):
    http_client.responses.append(
        fake_response(
            lines=[
                'data: {"model": "llama3.2", "message": {"role": "assistant", "content": "Hello world"}, '
                '"done": true, "prompt_eval_count": 10, "eval_count": 10}',
                "",
            ]
        )
    )
    platform = create_platform(HOST, http_client)

    result = platform.invoke("llama3.2", PAYLOAD, {"stream": True}).get_result()

    assert isinstance(result, StreamResult)
    assert list(result) == ["Hello world"]
    assert http_client.request_count == 1


def test_structured_output_reaches_format(http_client, chat_response):
    http_client.responses.append(chat_response('{"age": 22}'))
    schema = {"type": "object", "properties": {"age": {"type": "integer"}}}

    create_platform(HOST, http_client).invoke(
        "llama3.2", PAYLOAD, {RESPONSE_FORMAT: build_response_format(schema, name="person")}
    )

    body = http_client.requests[0]["json"]
    assert body["format"] == schema
    assert RESPONSE_FORMAT not in body


def test_embeddings_are_routed_to_embed(http_client, fake_response):
    http_client.responses.append(fake_response({"model": "nomic-embed-text", "embeddings": [[0.5, 0.25]]}))

    vectors = create_platform(HOST, http_client).invoke("nomic-embed-text", "hello").as_vectors()

    assert vectors == [[0.5, 0.25]]
    assert http_client.requests[0]["url"] == f"{HOST}/api/embed"


def test_as_text_on_vectors_raises(http_client, fake_response):
    http_client.responses.append(fake_response({"embeddings": [[1.0]]}))

    with pytest.raises(TypeError):
        create_platform(HOST, http_client).invoke("nomic-embed-text", "hello").as_text()


def test_unsupported_model_raises_before_request(http_client):
    catalog = ModelCatalog({"whisper": [Capability.INPUT_AUDIO]})
    platform = create_platform(HOST, http_client, catalog)

    with pytest.raises(InvalidArgumentError, match="Unsupported model"):
        platform.invoke("whisper", "audio")

    assert http_client.request_count == 0


def test_missing_client_raises(http_client):
    platform = Platform([], [])

    with pytest.raises(InvalidArgumentError, match="No model client"):
        platform.invoke("llama3.2", PAYLOAD)

    assert http_client.request_count == 0


def test_call_options_override_model_defaults(http_client, chat_response):
    class DefaultsCatalog(ModelCatalog):
        def get_model(self, name, options=None):
            return super().get_model(name, {"temperature": 0.7, "num_ctx": 4096})

    http_client.responses.append(chat_response())
    create_platform(HOST, http_client, DefaultsCatalog()).invoke("llama3.2", PAYLOAD, {"temperature": 0.1})

    assert http_client.requests[0]["json"]["options"] == {"temperature": 0.1, "num_ctx": 4096}
