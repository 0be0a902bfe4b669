"""Error normalization for chain failures.

Anything a chain step raises or rejects with is coerced into one raisable shape:
- STRUCTURED: Exception instances pass through untouched (identity is preserved)
- STRING: a bare string becomes ChainError(message)
- OPAQUE: any other value becomes ChainError with a JSON rendering of the value
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from typing import Self

import orjson
from pydantic import BaseModel, ConfigDict

from safechain.foundation.config import settings_or_defaults


class ErrorKind(StrEnum):
    """Origin of a normalized error."""
    STRUCTURED = "STRUCTURED"
    STRING = "STRING"
    OPAQUE = "OPAQUE"


class ChainError(Exception):
    """Raised form of a failure whose original value was not an exception.

    Attributes:
        kind: STRING or OPAQUE
        value: The raw failure value (the string itself for STRING)
    """

    __slots__ = ("kind", "value")

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.STRING, value: object = None) -> None:
        self.kind = kind
        self.value = message if value is None and kind is ErrorKind.STRING else value
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    @property
    def info(self) -> ErrorInfo:
        return ErrorInfo.from_exception(self)

    def __repr__(self) -> str:
        return f"ChainError({self.message!r}, kind={self.kind.value})"


class ErrorInfo(BaseModel):
    """Serializable description of a normalized error."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str
    kind: ErrorKind = ErrorKind.STRUCTURED
    type_name: str = "Exception"
    details: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException, *, include_trace: bool = False) -> Self:
        """Describe exc; include_trace adds the formatted traceback as details."""
        return cls(
            message=exc.message if isinstance(exc, ChainError) else str(exc),
            kind=exc.kind if isinstance(exc, ChainError) else ErrorKind.STRUCTURED,
            type_name=type(exc).__name__,
            details="".join(traceback.format_exception(exc)) if include_trace else None,
        )

    def render(self) -> str:
        """Format as `TypeName: message`, followed by details when present."""
        head = f"{self.type_name}: {self.message}" if self.message else self.type_name
        return f"{head}\n{self.details}" if self.details else head

    __str__ = render


def classify(error: object) -> ErrorKind:
    """Tag a raw failure value with its ErrorKind."""
    if isinstance(error, Exception):
        return ErrorKind.STRUCTURED
    if isinstance(error, str):
        return ErrorKind.STRING
    return ErrorKind.OPAQUE


def _default(obj: object) -> object:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def _describe(value: object) -> str:
    """Best-effort message for an opaque failure value."""
    try:
        text = orjson.dumps(value, default=_default, option=orjson.OPT_NON_STR_KEYS).decode()
    except (TypeError, ValueError):
        try:
            text = str(value)
        except Exception:
            text = object.__repr__(value)
    limit = settings_or_defaults().error_max_message
    return text if len(text) <= limit else f"{text[:limit]}..."


def normalize_error(error: object) -> Exception:
    """Coerce any failure value into a raisable error. Never raises."""
    match classify(error):
        case ErrorKind.STRUCTURED:
            return error  # type: ignore[return-value]
        case ErrorKind.STRING:
            return ChainError(error, ErrorKind.STRING)  # type: ignore[arg-type]
        case _:
            return ChainError(_describe(error), ErrorKind.OPAQUE, error)
