import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from cpframe.security import (
    IV_SIZE,
    KEY_SIZE,
    SecurityData,
    decrypt_cbc,
    encrypt_cbc,
    generate_random_key_and_iv,
)

# Public AES-128-CBC test vector (SP 800-38A, F.2.1).
VECTOR_MATERIAL = SecurityData(
    bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
    bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
)
VECTOR_PLAIN = bytes.fromhex("6bc1bee22e409f96e93d7e117393172a")


def test_known_vector_first_block():
    out = encrypt_cbc(VECTOR_PLAIN, VECTOR_MATERIAL)
    assert out[:16] == bytes.fromhex("7649abac8119b246cee98e9b12e9197d")


def test_full_block_gets_extra_padding_block():
    out = encrypt_cbc(VECTOR_PLAIN, VECTOR_MATERIAL)
    assert len(out) == 2 * IV_SIZE
    assert decrypt_cbc(out, VECTOR_MATERIAL) == VECTOR_PLAIN


@pytest.mark.parametrize("size", [1, 15, 16, 17, 31, 100])
def test_round_trip(size):
    material = generate_random_key_and_iv()
    plain = bytes(i % 256 for i in range(size))
    encrypted = encrypt_cbc(plain, material)
    assert len(encrypted) % IV_SIZE == 0
    assert len(encrypted) > size
    assert decrypt_cbc(encrypted, material) == plain


def test_encrypt_empty_gives_empty():
    assert encrypt_cbc(b"", VECTOR_MATERIAL) == b""


def test_decrypt_empty_raises():
    with pytest.raises(ValueError, match="size"):
        decrypt_cbc(b"", VECTOR_MATERIAL)


def test_decrypt_bad_size_raises():
    with pytest.raises(ValueError, match="size"):
        decrypt_cbc(bytes(17), VECTOR_MATERIAL)


def _raw_encrypt(block):
    enc = Cipher(algorithms.AES(VECTOR_MATERIAL.key), modes.CBC(VECTOR_MATERIAL.iv)).encryptor()
    return enc.update(block) + enc.finalize()


def test_decrypt_zero_padding_raises():
    with pytest.raises(ValueError, match="PKCS7"):
        decrypt_cbc(_raw_encrypt(bytes(16)), VECTOR_MATERIAL)


def test_decrypt_padding_too_large_raises():
    with pytest.raises(ValueError, match="PKCS7"):
        decrypt_cbc(_raw_encrypt(bytes([IV_SIZE + 1]) * 16), VECTOR_MATERIAL)


def test_decrypt_inconsistent_padding_raises():
    block = bytes(13) + bytes([1, 3, 3])
    with pytest.raises(ValueError, match="PKCS7"):
        decrypt_cbc(_raw_encrypt(block), VECTOR_MATERIAL)


def test_full_padding_block_decrypts_to_empty():
    block = bytes([IV_SIZE]) * IV_SIZE
    assert decrypt_cbc(_raw_encrypt(block), VECTOR_MATERIAL) == b""


def test_different_iv_changes_ciphertext():
    other = SecurityData(VECTOR_MATERIAL.key, bytes(IV_SIZE))
    assert encrypt_cbc(VECTOR_PLAIN, other) != encrypt_cbc(VECTOR_PLAIN, VECTOR_MATERIAL)


def test_generate_random_sizes_and_uniqueness():
    first = generate_random_key_and_iv()
    second = generate_random_key_and_iv()
    assert len(first.key) == KEY_SIZE
    assert len(first.iv) == IV_SIZE
    assert (first.key, first.iv) != (second.key, second.iv)


def test_security_data_rejects_wrong_sizes():
    with pytest.raises(ValueError):
        SecurityData(bytes(8), bytes(IV_SIZE))
    with pytest.raises(ValueError):
        SecurityData(bytes(KEY_SIZE), bytes(4))


def test_security_data_defaults_are_zero():
    material = SecurityData()
    assert material.key == bytes(KEY_SIZE)
    assert material.iv == bytes(IV_SIZE)