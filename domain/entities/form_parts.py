# domain/entities/form_parts.py
# -----------------------------------------------------------------------------
# Multipart requests describe themselves as an ordered list of parts. The
# order returned by `form_parts()` is the order on the wire.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Protocol, Union

from domain.entities.input_source import FileInput


@dataclass(frozen=True)
class TextPart:
    name: str
    value: str


@dataclass(frozen=True)
class FilePart:
    name: str
    file: FileInput


FormPart = Union[TextPart, FilePart]


class MultipartRequest(Protocol):
    def form_parts(self) -> List[FormPart]: ...


def text_field(name: str, value: Any) -> Optional[TextPart]:
    """Text part for `value`, or None when the optional field is unset."""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    return TextPart(name, str(value))


def repeated_text_field(name: str, values: Optional[Iterable[Any]]) -> List[TextPart]:
    return [part for part in (text_field(name, v) for v in values or ()) if part]


def compact(*parts: Union[FormPart, List[TextPart], None]) -> List[FormPart]:
    out: List[FormPart] = []
    for part in parts:
        if part is None:
            continue
        if isinstance(part, list):
            out.extend(part)
        else:
            out.append(part)
    return out
