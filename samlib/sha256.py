"""SHA-256 message digest (FIPS 180-2)."""

from __future__ import annotations

import struct
from typing import Union

SHA256_DIGEST_SIZE = 32
_BLOCK_SIZE = SHA256_DIGEST_SIZE * 2
_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1

_H0 = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B,
    0x59F111F1, 0x923F82A4, 0xAB1C5ED5, 0xD807AA98, 0x12835B01,
    0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7,
    0xC19BF174, 0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA, 0x983E5152,
    0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147,
    0x06CA6351, 0x14292967, 0x27B70A85, 0x2E1B2138, 0x4D2C6DFC,
    0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819,
    0xD6990624, 0xF40E3585, 0x106AA070, 0x19A4C116, 0x1E376C08,
    0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F,
    0x682E6FF3, 0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

_WORDS = struct.Struct(">16I")

BytesLike = Union[bytes, bytearray, memoryview]


def _rotr(bits: int, word: int) -> int:
    return ((word >> bits) | (word << (32 - bits))) & _MASK32


def _compress(h: tuple[int, ...], block: bytes) -> tuple[int, ...]:
    w = list(_WORDS.unpack(block))
    for t in range(16, 64):
        x15, x2 = w[t - 15], w[t - 2]
        s0 = _rotr(7, x15) ^ _rotr(18, x15) ^ (x15 >> 3)
        s1 = _rotr(17, x2) ^ _rotr(19, x2) ^ (x2 >> 10)
        w.append((s1 + w[t - 7] + s0 + w[t - 16]) & _MASK32)

    a, b, c, d, e, f, g, hh = h
    for k, wt in zip(_K, w):
        big_s1 = _rotr(6, e) ^ _rotr(11, e) ^ _rotr(25, e)
        ch = (e & (f ^ g)) ^ g
        temp1 = (hh + big_s1 + ch + k + wt) & _MASK32
        big_s0 = _rotr(2, a) ^ _rotr(13, a) ^ _rotr(22, a)
        maj = (a & (b | c)) | (b & c)
        temp2 = (big_s0 + maj) & _MASK32
        hh, g, f, e = g, f, e, (d + temp1) & _MASK32
        d, c, b, a = c, b, a, (temp1 + temp2) & _MASK32

    return tuple((x + y) & _MASK32 for x, y in zip(h, (a, b, c, d, e, f, g, hh)))


class SHA256:
    """An incremental SHA-256 hash; ``digest`` may be called at any point."""

    digest_size = SHA256_DIGEST_SIZE
    block_size = _BLOCK_SIZE

    def __init__(self, data: BytesLike = b"") -> None:
        self._h = _H0
        self._buf = b""
        self._len = 0
        if data:
            self.update(data)

    def update(self, data: BytesLike) -> None:
        """Feed more bytes into the hash."""
        data = bytes(data)
        if not data:
            return
        self._len = (self._len + len(data)) & _MASK64
        buf = self._buf + data
        whole = len(buf) - len(buf) % _BLOCK_SIZE
        h = self._h
        for start in range(0, whole, _BLOCK_SIZE):
            h = _compress(h, buf[start:start + _BLOCK_SIZE])
        self._h = h
        self._buf = buf[whole:]

    def digest(self) -> bytes:
        """Return the 32-byte digest of everything fed so far."""
        tail = self._buf + b"\x80"
        if len(tail) > _BLOCK_SIZE - 8:
            tail = tail.ljust(_BLOCK_SIZE * 2 - 8, b"\0")
        else:
            tail = tail.ljust(_BLOCK_SIZE - 8, b"\0")
        tail += struct.pack(">Q", (self._len * 8) & _MASK64)
        h = self._h
        for start in range(0, len(tail), _BLOCK_SIZE):
            h = _compress(h, tail[start:start + _BLOCK_SIZE])
        return struct.pack(">8I", *h)

    def hexdigest(self) -> str:
        """Return the digest as lower-case hex."""
        return sha256str(self.digest())


def sha256(data: BytesLike) -> bytes:
    """Return the SHA-256 digest of ``data``."""
    return SHA256(data).digest()


def sha256str(digest: BytesLike) -> str:
    """Return a 32-byte digest as 64 lower-case hex characters."""
    digest = bytes(digest)
    if len(digest) != SHA256_DIGEST_SIZE:
        raise ValueError(f"SHA-256 digest must be {SHA256_DIGEST_SIZE} bytes")
    return digest.hex()