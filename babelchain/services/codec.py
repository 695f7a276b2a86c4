"""JSON codec for language tables: ingestion and serialization boundaries."""

import asyncio
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from babelchain.errors import DecodeFailure, EncodeFailure, InvalidArgument

_TABLE = TypeAdapter(dict[str, Any])


def _read_path(path: os.PathLike, encoding: str) -> str:
    try:
        return Path(path).read_text(encoding=encoding)
    except FileNotFoundError as exc:
        raise DecodeFailure(f"language file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DecodeFailure(f"failed to read language file {path}: {exc}") from exc
    except LookupError as exc:
        raise InvalidArgument(f"unknown encoding '{encoding}'") from exc


def _to_text(payload, encoding: str) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (bytes, bytearray, memoryview)):
        try:
            return bytes(payload).decode(encoding)
        except UnicodeDecodeError as exc:
            raise DecodeFailure(f"payload is not valid {encoding}: {exc}") from exc
        except LookupError as exc:
            raise InvalidArgument(f"unknown encoding '{encoding}'") from exc
    if isinstance(payload, os.PathLike):
        return _read_path(payload, encoding)
    if callable(getattr(payload, "read", None)):
        try:
            data = payload.read()
        except OSError as exc:
            raise DecodeFailure(f"failed to read payload: {exc}") from exc
        if isinstance(data, str):
            return data
        if isinstance(data, (bytes, bytearray)):
            return _to_text(data, encoding)
        raise InvalidArgument(f"read() returned {type(data).__name__}, expected str or bytes")
    raise InvalidArgument(f"unsupported payload type {type(payload).__name__}")


def decode(payload, encoding: str = "utf-8") -> dict[str, Any]:
    """Decode a payload into a key/value table.

    Accepts JSON text, bytes, an in-memory mapping, a filesystem path or a
    file-like object. Decoding is all or nothing.
    """
    if isinstance(payload, Mapping):
        try:
            return _TABLE.validate_python(dict(payload), strict=True)
        except ValidationError as exc:
            raise DecodeFailure(f"invalid language table: {exc}") from exc

    text = _to_text(payload, encoding)
    try:
        return _TABLE.validate_json(text)
    except ValidationError as exc:
        raise DecodeFailure(f"invalid language JSON: {exc}") from exc


async def decode_async(payload, encoding: str = "utf-8") -> dict[str, Any]:
    """Like :func:`decode`, reading files and streams off the event loop."""
    if isinstance(payload, (str, bytes, bytearray, memoryview, Mapping)):
        return decode(payload, encoding)
    return await asyncio.to_thread(decode, payload, encoding)


def encode(table: Mapping[str, Any], indent: int | None = 4) -> str:
    """Render a key/value table as JSON text, preserving key order."""
    if not isinstance(table, Mapping):
        raise InvalidArgument(f"language table must be a mapping, got {type(table).__name__}")
    try:
        return _TABLE.dump_json(dict(table), indent=indent).decode("utf-8")
    except PydanticSerializationError as exc:
        raise EncodeFailure(f"language table is not JSON serializable: {exc}") from exc
