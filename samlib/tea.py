"""Tiny Encryption Algorithm on little-endian 32-bit words."""

from __future__ import annotations

import struct

TEA_BAG_SIZE = 8
TEA_KEY_SIZE = 16
TEA_CONSTANT = 0x9E3779B9
_DECRYPT_SUM = 0xC6EF3720
_MASK = 0xFFFFFFFF
_BLOCK = struct.Struct("<2I")


def _key_words(key: bytes) -> tuple[int, int, int, int]:
    key = bytes(key)
    if len(key) != TEA_KEY_SIZE:
        raise ValueError(f"key must be {TEA_KEY_SIZE} bytes")
    return struct.unpack("<4I", key)


def _encrypt_block(k: tuple[int, int, int, int], v0: int, v1: int) -> bytes:
    total = 0
    for _ in range(32):
        total = (total + TEA_CONSTANT) & _MASK
        v0 = (v0 + ((((v1 << 4) + k[0]) ^ (v1 + total) ^ ((v1 >> 5) + k[1])))) & _MASK
        v1 = (v1 + ((((v0 << 4) + k[2]) ^ (v0 + total) ^ ((v0 >> 5) + k[3])))) & _MASK
    return _BLOCK.pack(v0, v1)


def _decrypt_block(k: tuple[int, int, int, int], v0: int, v1: int) -> bytes:
    total = _DECRYPT_SUM
    for _ in range(32):
        v1 = (v1 - ((((v0 << 4) + k[2]) ^ (v0 + total) ^ ((v0 >> 5) + k[3])))) & _MASK
        v0 = (v0 - ((((v1 << 4) + k[0]) ^ (v1 + total) ^ ((v1 >> 5) + k[1])))) & _MASK
        total = (total - TEA_CONSTANT) & _MASK
    return _BLOCK.pack(v0, v1)


def tea_bag_size(length: int) -> int:
    """Round ``length`` up to a whole number of blocks."""
    mod = length & (TEA_BAG_SIZE - 1)
    if mod:
        length += TEA_BAG_SIZE - mod
    return length


def tea_encrypt(key: bytes, data: bytes) -> bytes:
    """Encrypt ``data``; a trailing partial block is zero-padded to a full block."""
    k = _key_words(key)
    data = bytes(data)
    whole = len(data) - len(data) % TEA_BAG_SIZE
    out = bytearray()
    for v0, v1 in _BLOCK.iter_unpack(data[:whole]):
        out += _encrypt_block(k, v0, v1)
    tail = data[whole:]
    if tail:
        out += _encrypt_block(k, *_BLOCK.unpack(tail.ljust(TEA_BAG_SIZE, b"\0")))
    return bytes(out)


def tea_decrypt(key: bytes, data: bytes) -> bytes:
    """Decrypt the whole blocks of ``data``; any trailing partial block is kept as is."""
    k = _key_words(key)
    data = bytes(data)
    whole = len(data) - len(data) % TEA_BAG_SIZE
    out = bytearray()
    for v0, v1 in _BLOCK.iter_unpack(data[:whole]):
        out += _decrypt_block(k, v0, v1)
    out += data[whole:]
    return bytes(out)