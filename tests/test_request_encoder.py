# tests/test_request_encoder.py

import json

import pytest

from domain.entities.audio import (
    AudioResponseFormat,
    CreateTranscriptionRequest,
    CreateTranslationRequest,
    TimestampGranularity,
)
from domain.entities.chat import ChatCompletionRequestMessage, CreateChatCompletionRequest, Role
from domain.entities.file import CreateFileRequest
from domain.entities.image import CreateImageEditRequest, CreateImageVariationRequest, ImageSize
from domain.entities.input_source import AudioInput, FileInput, ImageInput
from domain.errors import FileIOError, InvalidArgumentError
from infrastructure.config import AzureConfig, OpenAIConfig
from infrastructure.request_encoder import encode_json, encode_multipart, read_source


@pytest.fixture
def config():
    return OpenAIConfig(api_key="sk-test", api_base="https://api.test/v1")


def field_names(descriptor):
    return [name for name, _ in descriptor.files]


def test_json_body_round_trips_and_drops_unset_fields(config):
    request = CreateChatCompletionRequest(
        model="gpt-test",
        messages=[ChatCompletionRequestMessage(role=Role.USER, content="hello")],
        temperature=0.2,
    )

    descriptor = encode_json(config, "POST", "/chat/completions", request)

    assert CreateChatCompletionRequest.model_validate_json(descriptor.content) == request
    assert "top_p" not in json.loads(descriptor.content)
    assert ("Content-Type", "application/json") in descriptor.headers
    assert ("Accept", "text/event-stream") not in descriptor.headers
    assert descriptor.url == "https://api.test/v1/chat/completions"


def test_streaming_request_asks_for_event_stream(config):
    descriptor = encode_json(config, "POST", "/completions", {"model": "m"}, stream=True)
    assert ("Accept", "text/event-stream") in descriptor.headers


def test_get_without_body_has_no_content_type(config):
    descriptor = encode_json(config, "GET", "/models")
    assert descriptor.content is None
    assert all(name != "Content-Type" for name, _ in descriptor.headers)


def test_query_merges_backend_and_caller_params():
    azure = AzureConfig(api_base="https://res.openai.azure.com", api_version="v1", deployment_id="d")

    descriptor = encode_json(azure, "GET", "/files", query={"purpose": "fine-tune", "after": None})

    assert descriptor.params == (("api-version", "v1"), ("purpose", "fine-tune"))


def test_unserializable_body_is_invalid_argument(config):
    with pytest.raises(InvalidArgumentError):
        encode_json(config, "POST", "/embeddings", {"input": object()})


@pytest.mark.asyncio
async def test_transcription_parts_follow_declared_order(config):
    request = CreateTranscriptionRequest(
        file=AudioInput.from_bytes("audio.mp3", b"ID3"),
        model="whisper-1",
        response_format=AudioResponseFormat.VERBOSE_JSON,
        language="en",
        timestamp_granularities=[TimestampGranularity.WORD, TimestampGranularity.SEGMENT],
    )

    descriptor = await encode_multipart(config, "/audio/transcriptions", request)

    assert field_names(descriptor) == [
        "file",
        "model",
        "response_format",
        "language",
        "timestamp_granularities[]",
        "timestamp_granularities[]",
    ]
    assert descriptor.files[0] == ("file", ("audio.mp3", b"ID3"))
    assert descriptor.files[2] == ("response_format", (None, "verbose_json"))
    assert descriptor.content is None


@pytest.mark.asyncio
async def test_translation_omits_unset_optional_fields(config):
    request = CreateTranslationRequest(file=AudioInput.from_bytes("a.wav", b"RIFF"), model="whisper-1")

    descriptor = await encode_multipart(config, "/audio/translations", request)

    assert field_names(descriptor) == ["file", "model"]


@pytest.mark.asyncio
async def test_image_edit_and_variation_part_order(config):
    edit = CreateImageEditRequest(
        image=ImageInput.from_bytes("image.png", b"\x89PNG"),
        prompt="add a hat",
        mask=ImageInput.from_bytes("mask.png", b"\x89PNG"),
        n=2,
        size=ImageSize.S512X512,
    )
    variation = CreateImageVariationRequest(
        image=ImageInput.from_bytes("image.png", b"\x89PNG"), n=1, user="u-1"
    )

    edit_descriptor = await encode_multipart(config, "/images/edits", edit)
    variation_descriptor = await encode_multipart(config, "/images/variations", variation)

    assert field_names(edit_descriptor) == ["image", "prompt", "mask", "n", "size"]
    assert edit_descriptor.files[3] == ("n", (None, "2"))
    assert field_names(variation_descriptor) == ["image", "n", "user"]


@pytest.mark.asyncio
async def test_file_upload_reads_path_source(config, tmp_path):
    path = tmp_path / "train.jsonl"
    path.write_bytes(b'{"prompt": "p"}\n')

    descriptor = await encode_multipart(
        config, "/files", CreateFileRequest(file=FileInput.from_path(path), purpose="fine-tune")
    )

    assert descriptor.files == (
        ("file", ("train.jsonl", b'{"prompt": "p"}\n')),
        ("purpose", (None, "fine-tune")),
    )


@pytest.mark.asyncio
async def test_unreadable_path_raises_file_io_error(config, tmp_path):
    missing = tmp_path / "missing.mp3"
    request = CreateTranslationRequest(file=AudioInput.from_path(missing), model="whisper-1")

    with pytest.raises(FileIOError) as excinfo:
        await encode_multipart(config, "/audio/translations", request)

    assert excinfo.value.path == str(missing)


@pytest.mark.asyncio
async def test_buffer_source_copies_view_at_read_time():
    buffer = bytearray(b"abc")
    source = FileInput.from_buffer("b.bin", buffer).source
    buffer[0:1] = b"x"

    assert await read_source(source) == b"xbc"
