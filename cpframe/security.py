"""AES-128-CBC encryption with PKCS#7 padding and random key generation."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from typing import Union

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

KEY_SIZE = 16
IV_SIZE = 16

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class SecurityData:
    """An AES-128 key and initialization vector."""

    key: bytes = field(default=bytes(KEY_SIZE), repr=False)
    iv: bytes = field(default=bytes(IV_SIZE), repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", bytes(self.key))
        object.__setattr__(self, "iv", bytes(self.iv))
        if len(self.key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes")
        if len(self.iv) != IV_SIZE:
            raise ValueError(f"iv must be {IV_SIZE} bytes")


def _cipher(security_data: SecurityData) -> Cipher:
    return Cipher(algorithms.AES(security_data.key), modes.CBC(security_data.iv))


def encrypt_cbc(data: BytesLike, security_data: SecurityData) -> bytes:
    """Encrypt with PKCS#7 padding; empty input gives empty output."""
    plain = bytes(data)
    if not plain:
        return b""
    pad = IV_SIZE - len(plain) % IV_SIZE
    padded = plain + bytes([pad]) * pad
    encryptor = _cipher(security_data).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def decrypt_cbc(encrypted: BytesLike, security_data: SecurityData) -> bytes:
    """Decrypt and strip PKCS#7 padding; raises ValueError on bad size or padding."""
    blob = bytes(encrypted)
    if not blob or len(blob) % IV_SIZE:
        raise ValueError("Invalid encrypted data size")
    decryptor = _cipher(security_data).decryptor()
    decrypted = decryptor.update(blob) + decryptor.finalize()

    pad = decrypted[-1]
    if pad == 0 or pad > IV_SIZE:
        raise ValueError("Invalid PKCS7 padding")
    if any(byte != pad for byte in decrypted[-pad:]):
        raise ValueError("Invalid PKCS7 padding")
    return decrypted[:-pad]


def generate_random_key_and_iv() -> SecurityData:
    """A fresh key and IV from the system's cryptographic random source."""
    return SecurityData(secrets.token_bytes(KEY_SIZE), secrets.token_bytes(IV_SIZE))