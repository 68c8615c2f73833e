from __future__ import annotations
import codecs
from typing import BinaryIO

import chardet  # type: ignore

DEFAULT_ENCODING = "utf-8"
SAMPLE_BYTES = 64 * 1024


def is_line_compatible(encoding: str) -> bool:
    """True when newline and tab encode to their single ASCII bytes.

    The scanner splits raw bytes on ``\\n`` and spots continuations by a leading
    ``\\t``, which rules out wide encodings such as UTF-16 and UTF-32.
    """
    try:
        return "\n\t".encode(encoding) == b"\n\t"
    except (LookupError, UnicodeError):
        return False


def detect_encoding(data: bytes, fallback: str = DEFAULT_ENCODING) -> str:
    """Best-guess codec name for ``data``; ``fallback`` when chardet has no usable answer."""
    if not data:
        return fallback
    enc = chardet.detect(data).get("encoding")
    if not enc:
        return fallback
    try:
        name = codecs.lookup(enc).name
    except LookupError:
        return fallback
    return name if is_line_compatible(name) else fallback


def sample_encoding(f: BinaryIO, fallback: str = DEFAULT_ENCODING) -> str:
    """Detect the encoding of the unread part of ``f`` without moving its position."""
    pos = f.tell()
    try:
        return detect_encoding(f.read(SAMPLE_BYTES), fallback)
    finally:
        f.seek(pos)


def decode_lossy(raw: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode, dropping any byte sequence the encoding cannot represent."""
    return raw.decode(encoding, errors="ignore")
