"""Explicit representation of the optional activity metadata payload.

Stored metadata is an opaque JSON document that may be missing, blank or
malformed. It travels as :class:`RawMetadata` until the feed decodes it at
the response boundary into :class:`ParsedMetadata`; anything that cannot be
decoded becomes ``None``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawMetadata:
    """Undecoded payload exactly as it was stored."""

    data: bytes

    @classmethod
    def from_text(cls, text: str) -> "RawMetadata":
        return cls(text.encode("utf-8"))


@dataclass(frozen=True)
class ParsedMetadata:
    """Decoded key/value document."""

    document: dict[str, Any] = field(default_factory=dict)


Metadata = Union[None, RawMetadata, ParsedMetadata]


def to_metadata(value: object) -> Metadata:
    """Wrap a value read from storage without decoding it."""

    if value is None:
        return None
    if isinstance(value, (RawMetadata, ParsedMetadata)):
        return value
    if isinstance(value, dict):
        return ParsedMetadata(dict(value))
    if isinstance(value, str):
        return RawMetadata.from_text(value)
    if isinstance(value, (bytes, bytearray)):
        return RawMetadata(bytes(value))
    return RawMetadata.from_text(str(value))


def _reject_constant(name: str) -> Any:
    # NaN and the infinities are not JSON and cannot be rendered back.
    raise ValueError(f"Unsupported JSON constant {name}")


def decode_metadata(value: Metadata) -> ParsedMetadata | None:
    """Decode ``value`` into a document, returning ``None`` on any failure."""

    if value is None:
        return None
    if isinstance(value, ParsedMetadata):
        return value

    if not value.data.strip():
        return None
    try:
        document = json.loads(value.data, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        logger.debug("Discarding malformed activity metadata: %r", value.data[:80])
        return None
    if not isinstance(document, dict):
        logger.debug("Discarding non-object activity metadata: %r", value.data[:80])
        return None
    return ParsedMetadata(document)


def metadata_document(value: Metadata) -> dict[str, Any] | None:
    """Return the decoded document for ``value`` or ``None``."""

    parsed = decode_metadata(value)
    return parsed.document if parsed is not None else None


def encode_metadata(document: dict[str, Any] | None) -> str | None:
    """Serialize ``document`` for storage."""

    if document is None:
        return None
    return json.dumps(document, default=str)


__all__ = [
    "Metadata",
    "ParsedMetadata",
    "RawMetadata",
    "decode_metadata",
    "encode_metadata",
    "metadata_document",
    "to_metadata",
]
