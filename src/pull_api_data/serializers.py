"""String <-> value serializers used by ConfigFile."""

from __future__ import annotations

import re
from typing import Any, Protocol, TypeVar

T = TypeVar("T")

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:inf|nan))",
    flags=re.IGNORECASE,
)
_FALSE_WORDS = frozenset({"false", "f", "no", "n", "0", "none"})


class ConversionError(ValueError):
    """Raised when text cannot be parsed into the requested type."""

    def __init__(self, text: str, target: str) -> None:
        super().__init__(f"Cannot convert {text!r} to {target}")
        self.text = text
        self.target = target


class Serializer(Protocol[T]):
    """Converts one type to and from its config-file text form."""

    def format(self, value: T) -> str:
        """Return the text stored for *value*."""
        ...

    def parse(self, text: str) -> T:
        """Return the value encoded by *text*."""
        ...


class StrSerializer:
    def format(self, value: str) -> str:
        return value

    def parse(self, text: str) -> str:
        return text


class IntSerializer:
    """Reads the leading integer, ignoring whatever follows (``"2.5 kg"`` -> 2)."""

    def format(self, value: int) -> str:
        return str(value)

    def parse(self, text: str) -> int:
        match = _INT_RE.match(text)
        if match is None:
            raise ConversionError(text, "int")
        return int(match.group(1))


class FloatSerializer:
    """Reads the leading decimal number (``"2.5 kg"`` -> 2.5)."""

    def format(self, value: float) -> str:
        return repr(value)

    def parse(self, text: str) -> float:
        match = _FLOAT_RE.match(text)
        if match is None:
            raise ConversionError(text, "float")
        return float(match.group(1))


class BoolSerializer:
    """``false f no n 0 none`` (any case) are false; everything else is true."""

    def format(self, value: bool) -> str:
        return "true" if value else "false"

    def parse(self, text: str) -> bool:
        return text.strip().lower() not in _FALSE_WORDS


class SerializerRegistry:
    """Maps Python types to the serializer that handles them.

    Lookups walk the MRO, so a subclass of a registered type resolves to its
    parent's serializer unless it has its own.
    """

    def __init__(self, serializers: dict[type, Serializer[Any]] | None = None) -> None:
        self._serializers: dict[type, Serializer[Any]] = dict(serializers or {})

    def register(self, type_: type, serializer: Serializer[Any]) -> None:
        self._serializers[type_] = serializer

    def for_type(self, type_: type) -> Serializer[Any]:
        for klass in type_.__mro__:
            if klass in self._serializers:
                return self._serializers[klass]
        raise TypeError(f"No serializer registered for {type_.__name__}")

    def resolve(self, kind: type | Serializer[Any]) -> Serializer[Any]:
        """Return *kind* itself if it is a serializer, else look it up by type."""
        if isinstance(kind, type):
            return self.for_type(kind)
        if hasattr(kind, "parse") and hasattr(kind, "format"):
            return kind
        raise TypeError(f"Expected a type or serializer, got {kind!r}")

    def format(self, value: Any) -> str:
        return self.for_type(type(value)).format(value)

    def __contains__(self, type_: type) -> bool:
        return any(klass in self._serializers for klass in type_.__mro__)


def default_registry() -> SerializerRegistry:
    """Return a fresh registry with the str, int, float and bool serializers."""
    return SerializerRegistry({
        str: StrSerializer(),
        int: IntSerializer(),
        float: FloatSerializer(),
        bool: BoolSerializer(),
    })
