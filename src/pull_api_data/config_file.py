"""INI-style ``key = value`` configuration files with typed lookups."""

from __future__ import annotations

import io
import os
import pathlib
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, TextIO, TypeVar

from pull_api_data.serializers import Serializer, SerializerRegistry, default_registry

T = TypeVar("T")

_MISSING: Any = object()


class ConfigFileError(Exception):
    """Base class for ConfigFile errors."""


class ConfigFileNotFound(ConfigFileError, FileNotFoundError):
    """The configuration file could not be opened."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Configuration file not found: {filename}")
        self.filename = filename


class ConfigKeyNotFound(ConfigFileError, KeyError):
    """A strict read asked for a key that is not in the file."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key not found: {self.key}"


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Outcome of a strict read: either a value or the missing-key error."""

    key: str
    value: T | None = None
    error: ConfigKeyNotFound | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class ConfigFile:
    """Typed key/value store loaded from a delimiter-separated text file.

    Example file::

        apples = 7             # comment after apples
        zone   = 1 2 3         # a value may continue on
                 4 5 6         # indented lines without a delimiter

        A line with no delimiter after a blank line is a comment.
        EndConfigFile
        anything after the sentry is ignored

    Usage::

        config = ConfigFile("example.conf")
        apples = config.read("apples", int)
        on_sale = config.read("sale", default=False)
    """

    def __init__(
        self,
        filename: str | os.PathLike[str] | None = None,
        delimiter: str = "=",
        comment: str = "#",
        sentry: str = "EndConfigFile",
        *,
        registry: SerializerRegistry | None = None,
        encoding: str = "utf-8",
    ) -> None:
        if not delimiter:
            raise ValueError("Delimiter must not be empty.")
        self._delimiter = delimiter
        self._comment = comment
        self._sentry = sentry
        self._registry = registry or default_registry()
        self._contents: dict[str, str] = {}
        if filename is not None:
            path = pathlib.Path(filename)
            try:
                with path.open(encoding=encoding, errors="replace") as f:
                    self.load(f)
            except OSError as exc:
                raise ConfigFileNotFound(str(filename)) from exc

    # --- syntax ---

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @delimiter.setter
    def delimiter(self, value: str) -> None:
        if not value:
            raise ValueError("Delimiter must not be empty.")
        self._delimiter = value

    @property
    def comment(self) -> str:
        return self._comment

    @comment.setter
    def comment(self, value: str) -> None:
        self._comment = value

    @property
    def sentry(self) -> str:
        return self._sentry

    @property
    def registry(self) -> SerializerRegistry:
        return self._registry

    def set_delimiter(self, value: str) -> str:
        """Change the delimiter and return the previous one."""
        old = self._delimiter
        self.delimiter = value
        return old

    def set_comment(self, value: str) -> str:
        """Change the comment marker and return the previous one."""
        old = self._comment
        self.comment = value
        return old

    # --- lookups ---

    def read(
        self,
        key: str,
        kind: type[T] | Serializer[T] | None = None,
        *,
        default: T = _MISSING,
    ) -> T:
        """Return the value for *key* parsed as *kind*.

        Without *default*, a missing key raises ``ConfigKeyNotFound``.
        With it, the default is returned instead and *kind* falls back to
        ``type(default)``.
        """
        key = key.strip()
        if key not in self._contents:
            if default is _MISSING:
                raise ConfigKeyNotFound(key)
            return default
        return self._serializer(kind, default).parse(self._contents[key])

    def read_result(
        self, key: str, kind: type[T] | Serializer[T] = str,  # type: ignore[assignment]
    ) -> ReadResult[T]:
        """Strict read that reports a missing key in the result instead of raising."""
        key = key.strip()
        if key not in self._contents:
            return ReadResult(key=key, error=ConfigKeyNotFound(key))
        value = self._registry.resolve(kind).parse(self._contents[key])
        return ReadResult(key=key, value=value)

    def read_into(
        self,
        var: T,
        key: str,
        default: T = _MISSING,
        *,
        kind: type[T] | Serializer[T] | None = None,
    ) -> tuple[bool, T]:
        """Return ``(found, value)`` without raising for a missing key.

        When *key* is missing, *value* is *var* unchanged, or *default* if
        one was given.  The type comes from *kind*, else *default*, else
        *var*.
        """
        key = key.strip()
        if key not in self._contents:
            return False, (var if default is _MISSING else default)
        return True, self._serializer(kind, default, var).parse(self._contents[key])

    def key_exists(self, key: str) -> bool:
        return key.strip() in self._contents

    # --- mutation ---

    def add(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any existing entry."""
        self._contents[key.strip()] = self._registry.format(value).strip()

    def remove(self, key: str) -> None:
        self._contents.pop(key.strip(), None)

    # --- serialization ---

    def load(self, stream: Iterable[str]) -> None:
        """Parse ``key = value`` lines from *stream* into the store.

        Stops at the sentry line.  A line without the delimiter continues
        the previous value unless a blank line came first, in which case
        it is a comment.  Comment-only lines do not end a running value.
        """
        active_key: str | None = None
        for raw in stream:
            if not raw.strip():
                active_key = None
                continue
            line = self._strip_comment(raw).strip()
            if not line:
                continue
            if self._sentry and line == self._sentry:
                break
            key, sep, value = line.partition(self._delimiter)
            if sep:
                active_key = key.strip()
                self._contents[active_key] = value.strip()
            elif active_key is not None:
                current = self._contents[active_key]
                self._contents[active_key] = f"{current}\n{line}" if current else line

    def loads(self, text: str) -> None:
        self.load(io.StringIO(text))

    def dump(self, stream: TextIO) -> None:
        """Write one ``key = value`` line per entry, sorted by key.

        Raises ``ValueError`` before writing anything if an entry could not
        be read back unchanged.
        """
        entries = sorted(self._contents.items())
        for key, value in entries:
            self._check_writable(key, value)
        for key, value in entries:
            prefix = f"{key} {self._delimiter} "
            first, *rest = value.split("\n")
            stream.write(f"{prefix}{first}\n")
            for line in rest:
                stream.write(f"{' ' * len(prefix)}{line}\n")

    def dumps(self) -> str:
        buf = io.StringIO()
        self.dump(buf)
        return buf.getvalue()

    def items(self) -> Iterable[tuple[str, str]]:
        return self._contents.items()

    def as_dict(self) -> dict[str, str]:
        return dict(self._contents)

    # --- helpers ---

    def _strip_comment(self, line: str) -> str:
        if not self._comment:
            return line
        return line.split(self._comment, 1)[0]

    def _check_writable(self, key: str, value: str) -> None:
        problem = None
        first, *rest = value.split("\n")
        if self._delimiter in key or "\n" in key:
            problem = "key contains the delimiter or a newline"
        elif self._comment and (self._comment in key or self._comment in value):
            problem = "entry contains the comment marker"
        elif first != first.strip():
            problem = "value has surrounding whitespace"
        for line in rest:
            if problem is not None:
                break
            if not line or line != line.strip():
                problem = "continuation line is empty or padded"
            elif self._delimiter in line:
                problem = "continuation line contains the delimiter"
            elif self._sentry and line == self._sentry:
                problem = "continuation line equals the sentry"
        if problem is not None:
            raise ValueError(f"Cannot write {key!r}: {problem}")

    def _serializer(self, kind: Any, *candidates: Any) -> Serializer[Any]:
        if kind is None:
            kind = str
            for candidate in candidates:
                if candidate is not _MISSING and candidate is not None:
                    kind = type(candidate)
                    break
        return self._registry.resolve(kind)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.strip() in self._contents

    def __iter__(self) -> Iterator[str]:
        return iter(self._contents)

    def __len__(self) -> int:
        return len(self._contents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigFile):
            return NotImplemented
        return self._contents == other._contents

    def __str__(self) -> str:
        return self.dumps()

    def __repr__(self) -> str:
        return f"ConfigFile({self._contents!r})"
