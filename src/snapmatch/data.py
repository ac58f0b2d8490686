"""Captured or expected output, tagged with its format."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

import portalocker
import pyjson5

from .exceptions import DataError

logger = logging.getLogger(__name__)


class DataFormat(Enum):
    """How a :class:`Data` value is stored and compared."""

    ERROR = "error"
    BINARY = "binary"
    TEXT = "text"
    JSON = "json"
    JSON_LINES = "jsonl"
    TERM_SVG = "term-svg"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "DataFormat":
        suffix = Path(path).suffix.lower()
        if suffix in {".json", ".json5"}:
            return cls.JSON
        if suffix == ".jsonl":
            return cls.JSON_LINES
        if suffix == ".svg":
            return cls.TERM_SVG
        return cls.TEXT


@dataclass(frozen=True)
class Data:
    """One actual or expected value.

    ``inner`` is a ``str`` for text, term-svg and error data, ``bytes`` for
    binary data, a JSON-like value for json data and a list of such values
    for json-lines data.
    """

    inner: Any
    format: DataFormat
    source: Optional[Path] = None

    # ------------------------------------------------------------------ constructors
    @classmethod
    def text(cls, value: str) -> "Data":
        return cls(value, DataFormat.TEXT)

    @classmethod
    def binary(cls, value: bytes) -> "Data":
        return cls(bytes(value), DataFormat.BINARY)

    @classmethod
    def json(cls, value: Any) -> "Data":
        return cls(value, DataFormat.JSON)

    @classmethod
    def json_lines(cls, values: List[Any]) -> "Data":
        return cls(list(values), DataFormat.JSON_LINES)

    @classmethod
    def term_svg(cls, value: str) -> "Data":
        return cls(value, DataFormat.TERM_SVG)

    @classmethod
    def error(cls, message: str) -> "Data":
        return cls(str(message), DataFormat.ERROR)

    def with_source(self, source: Optional[Path]) -> "Data":
        return replace(self, source=source)

    def with_inner(self, inner: Any) -> "Data":
        return replace(self, inner=inner)

    @property
    def is_error(self) -> bool:
        return self.format is DataFormat.ERROR

    # ------------------------------------------------------------------ rendering
    def render(self) -> Optional[str]:
        """Return the text form, or None when there is none."""

        if self.format in (DataFormat.TEXT, DataFormat.TERM_SVG):
            return self.inner
        if self.format is DataFormat.JSON:
            return json.dumps(self.inner, indent=2, ensure_ascii=False) + "\n"
        if self.format is DataFormat.JSON_LINES:
            return "".join(
                json.dumps(value, ensure_ascii=False) + "\n" for value in self.inner
            )
        if self.format is DataFormat.BINARY:
            try:
                return self.inner.decode("utf-8")
            except UnicodeDecodeError:
                return None
        return None

    # ------------------------------------------------------------------ loading
    @classmethod
    def try_read_from(cls, path: Union[str, Path], format: Optional[DataFormat] = None) -> "Data":
        path = Path(path)
        format = format or DataFormat.from_path(path)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise DataError(f"Failed to read {path}: {exc}") from exc

        if format is DataFormat.BINARY:
            return cls(raw, format, path)

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            if format is DataFormat.TEXT:
                logger.debug("%s is not UTF-8, loading as binary", path)
                return cls(raw, DataFormat.BINARY, path)
            raise DataError(f"Failed to decode {path}: {exc}") from exc

        if format is DataFormat.JSON:
            try:
                value = pyjson5.loads(text)
            except Exception as exc:
                raise DataError(f"Failed to parse {path}: {exc}") from exc
            return cls(value, format, path)
        if format is DataFormat.JSON_LINES:
            values = []
            for lineno, line in enumerate(text.split("\n"), start=1):
                if not line.strip():
                    continue
                try:
                    values.append(pyjson5.loads(line))
                except Exception as exc:
                    raise DataError(f"Failed to parse {path}:{lineno}: {exc}") from exc
            return cls(values, format, path)
        if format is DataFormat.ERROR:
            raise DataError(f"Cannot load {path} as error data")
        return cls(text, format, path)

    @classmethod
    def read_from(cls, path: Union[str, Path], format: Optional[DataFormat] = None) -> "Data":
        """Like :meth:`try_read_from` but reports failures as error data."""

        try:
            return cls.try_read_from(path, format)
        except DataError as exc:
            return cls(str(exc), DataFormat.ERROR, Path(path))

    # ------------------------------------------------------------------ writing
    def write_to(self, path: Union[str, Path]) -> None:
        path = Path(path)
        if self.format is DataFormat.ERROR:
            raise DataError(f"Refusing to write error data to {path}: {self.inner}")
        if self.format is DataFormat.BINARY:
            payload = bytes(self.inner)
        else:
            payload = (self.render() or "").encode("utf-8")

        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with portalocker.Lock(tmp, "wb", timeout=5) as handle:
            handle.write(payload)
        os.replace(tmp, path)
        logger.debug("Wrote %d bytes to %s", len(payload), path)
