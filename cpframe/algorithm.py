"""MD5 hashing, hexadecimal and Base64 helpers."""

from __future__ import annotations

import base64
import hashlib
import string
from typing import Optional, Union

BytesLike = Union[bytes, bytearray, memoryview, str]

_WHITESPACE = frozenset(" \t\n\v\f\r")
_HEX_DIGITS = frozenset(string.hexdigits)
_BASE64_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789+/"
)
_BASE64_DECODE = {ord(ch): value for value, ch in enumerate(_BASE64_ALPHABET)}
_WHITESPACE_BYTES = frozenset(ord(ch) for ch in _WHITESPACE)


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class MD5:
    """Incremental MD5 digest; the digest is fixed once finalized."""

    def __init__(self) -> None:
        self._hash = hashlib.md5(usedforsecurity=False)
        self._digest: Optional[bytes] = None

    @property
    def finalized(self) -> bool:
        return self._digest is not None

    def update(self, data: BytesLike) -> None:
        """Feed more data; ignored once the digest has been finalized."""
        if self._digest is None:
            self._hash.update(_as_bytes(data))

    def finalize(self) -> None:
        if self._digest is None:
            self._digest = self._hash.digest()

    @property
    def digest(self) -> bytes:
        self.finalize()
        assert self._digest is not None
        return self._digest

    def hexdigest(self) -> str:
        return self.digest.hex()

    @classmethod
    def compute(cls, data: BytesLike) -> "MD5":
        """Return a finalized MD5 of ``data``."""
        md5 = cls()
        md5.update(data)
        md5.finalize()
        return md5


def to_hex_string(data: BytesLike, uppercase: bool = False, prefix: bool = False) -> str:
    """Render bytes as hex, optionally upper case and with a ``0x`` before each byte."""
    fmt = "{:02X}" if uppercase else "{:02x}"
    lead = "0x" if prefix else ""
    return "".join(lead + fmt.format(byte) for byte in _as_bytes(data))


def _leading_hex_value(pair: str) -> Optional[int]:
    digits = ""
    for ch in pair:
        if ch not in _HEX_DIGITS:
            break
        digits += ch
    return int(digits, 16) if digits else None


def from_hex_string(hex_text: str) -> bytes:
    """Parse whitespace-tolerant hex text; returns empty bytes if it is invalid."""
    cleaned = "".join(ch for ch in hex_text if ch not in _WHITESPACE)
    if not cleaned or len(cleaned) % 2:
        return b""
    out = bytearray()
    for start in range(0, len(cleaned), 2):
        # Each pair is read like a number: leading hex digits count, the rest is ignored.
        value = _leading_hex_value(cleaned[start:start + 2])
        if value is None:
            return b""
        out.append(value)
    return bytes(out)


def from_hex_string_prefixed(hex_text: str) -> bytes:
    """Parse bytes written as optional ``0x``-prefixed pairs separated by whitespace."""
    out = bytearray()
    i = 0
    size = len(hex_text)
    while i < size:
        while i < size and hex_text[i] in _WHITESPACE:
            i += 1
        if i >= size:
            break
        if hex_text[i] == "0" and i + 1 < size and hex_text[i + 1] in "xX":
            i += 2
        if i + 1 >= size:
            return b""
        pair = hex_text[i:i + 2]
        i += 2
        if not all(ch in _HEX_DIGITS for ch in pair):
            return b""
        out.append(int(pair, 16))
    return bytes(out)


def base64_encode(data: BytesLike) -> str:
    """Standard Base64 with padding."""
    return base64.b64encode(_as_bytes(data)).decode("ascii")


def base64_encode_url_safe(data: BytesLike) -> str:
    """URL-safe Base64 without padding."""
    return base64.urlsafe_b64encode(_as_bytes(data)).decode("ascii").rstrip("=")


def base64_decode(encoded: BytesLike) -> bytes:
    """Decode Base64, stopping at '=' and skipping whitespace; empty bytes if invalid."""
    out = bytearray()
    val = 0
    valb = -8
    for code in _as_bytes(encoded):
        if code == ord("="):
            break
        digit = _BASE64_DECODE.get(code)
        if digit is None:
            if code not in _WHITESPACE_BYTES:
                return b""
            continue
        val = ((val << 6) | digit) & 0xFFFFFF
        valb += 6
        if valb >= 0:
            out.append((val >> valb) & 0xFF)
            valb -= 8
    return bytes(out)


def base64_decode_url_safe(encoded: BytesLike) -> bytes:
    """Decode URL-safe Base64, padded or not."""
    text = _as_bytes(encoded).replace(b"-", b"+").replace(b"_", b"/")
    text += b"=" * (-len(text) % 4)
    return base64_decode(text)