# infrastructure/request_encoder.py
# -----------------------------------------------------------------------------
# Turns a typed request into a ready-to-send request descriptor. JSON bodies
# are serialised up front; multipart forms are assembled from the request's
# ordered `form_parts()` and their file sources are read here, at send time.
# -----------------------------------------------------------------------------

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

import httpx
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from domain.contracts.i_config import IConfig
from domain.entities.form_parts import FilePart, MultipartRequest, TextPart
from domain.entities.input_source import BufferSource, BytesSource, InputSource, PathSource
from domain.errors import FileIOError, InvalidArgumentError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM = "text/event-stream"

JsonBody = Union[BaseModel, Mapping[str, Any]]
QueryParams = Union[BaseModel, Mapping[str, Any]]
# (field name, (filename or None for text fields, content))
MultipartField = Tuple[str, Tuple[Optional[str], Union[bytes, str]]]


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    params: Tuple[Tuple[str, str], ...] = ()
    headers: Tuple[Tuple[str, str], ...] = ()
    content: Optional[bytes] = None
    files: Optional[Tuple[MultipartField, ...]] = None

    def build(self, client: httpx.AsyncClient) -> httpx.Request:
        return client.build_request(
            self.method,
            self.url,
            params=list(self.params),
            headers=list(self.headers),
            content=self.content,
            # Text fields travel as filename-less parts so the declared order
            # is kept; httpx would otherwise place `data` before `files`.
            files=list(self.files) if self.files is not None else None,
        )


def _base_headers(config: IConfig, stream: bool) -> List[Tuple[str, str]]:
    headers = list(config.headers())
    if stream:
        headers.append(("Accept", EVENT_STREAM))
    return headers


def _query_pairs(config: IConfig, query: Optional[QueryParams]) -> Tuple[Tuple[str, str], ...]:
    pairs = list(config.query())
    if query is None:
        return tuple(pairs)
    if isinstance(query, BaseModel):
        query = query.model_dump(mode="json", exclude_none=True)
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        pairs.append((key, str(value)))
    return tuple(pairs)


def serialize_body(body: JsonBody) -> bytes:
    try:
        if isinstance(body, BaseModel):
            return body.model_dump_json(exclude_none=True).encode("utf-8")
        return json.dumps(dict(body)).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"request body is not JSON serializable: {exc}") from exc


def encode_json(
    config: IConfig,
    method: str,
    path: str,
    body: Optional[JsonBody] = None,
    *,
    query: Optional[QueryParams] = None,
    stream: bool = False,
) -> RequestDescriptor:
    headers = _base_headers(config, stream)
    content = None
    if body is not None:
        headers.append(("Content-Type", JSON_CONTENT_TYPE))
        content = serialize_body(body)

    return RequestDescriptor(
        method=method,
        url=config.url(path),
        params=_query_pairs(config, query),
        headers=tuple(headers),
        content=content,
    )


async def read_source(source: InputSource) -> bytes:
    if isinstance(source, BytesSource):
        return source.content
    if isinstance(source, BufferSource):
        return source.buffer.tobytes()
    if isinstance(source, PathSource):
        try:
            return await asyncio.to_thread(source.path.read_bytes)
        except OSError as exc:
            raise FileIOError(f"cannot read {source.path}: {exc}", path=str(source.path)) from exc
    raise InvalidArgumentError(f"unsupported input source: {type(source).__name__}")


async def encode_multipart(
    config: IConfig,
    path: str,
    form: MultipartRequest,
    *,
    stream: bool = False,
) -> RequestDescriptor:
    """
    Assemble a multipart/form-data request.

    Parts are emitted exactly in `form.form_parts()` order (file part first by
    endpoint contract). Unset optional fields are already absent from the list.
    Raises FileIOError before any network traffic if a path source is unreadable.
    """
    fields: List[MultipartField] = []
    for part in form.form_parts():
        if isinstance(part, FilePart):
            source = part.file.source
            content = await read_source(source)
            fields.append((part.name, (source.filename, content)))
        elif isinstance(part, TextPart):
            fields.append((part.name, (None, part.value)))
        else:
            raise InvalidArgumentError(f"unsupported form part: {type(part).__name__}")

    logger.debug("multipart form for %s: %s", path, [name for name, _ in fields])
    return RequestDescriptor(
        method="POST",
        url=config.url(path),
        params=_query_pairs(config, None),
        headers=tuple(_base_headers(config, stream)),
        files=tuple(fields),
    )
