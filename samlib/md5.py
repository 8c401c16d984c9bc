"""MD5 message digest (RFC 1321)."""

from __future__ import annotations

import struct
from typing import BinaryIO, Union

MD5_DIGEST_LEN = 16
_BLOCK_SIZE = 64
_READ_SIZE = 64 * 1024
_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1

_INIT = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

_T = (
    # Round 1
    0xD76AA478, 0xE8C7B756, 0x242070DB, 0xC1BDCEEE,
    0xF57C0FAF, 0x4787C62A, 0xA8304613, 0xFD469501,
    0x698098D8, 0x8B44F7AF, 0xFFFF5BB1, 0x895CD7BE,
    0x6B901122, 0xFD987193, 0xA679438E, 0x49B40821,
    # Round 2
    0xF61E2562, 0xC040B340, 0x265E5A51, 0xE9B6C7AA,
    0xD62F105D, 0x02441453, 0xD8A1E681, 0xE7D3FBC8,
    0x21E1CDE6, 0xC33707D6, 0xF4D50D87, 0x455A14ED,
    0xA9E3E905, 0xFCEFA3F8, 0x676F02D9, 0x8D2A4C8A,
    # Round 3
    0xFFFA3942, 0x8771F681, 0x6D9D6122, 0xFDE5380C,
    0xA4BEEA44, 0x4BDECFA9, 0xF6BB4B60, 0xBEBFBC70,
    0x289B7EC6, 0xEAA127FA, 0xD4EF3085, 0x04881D05,
    0xD9D4D039, 0xE6DB99E5, 0x1FA27CF8, 0xC4AC5665,
    # Round 4
    0xF4292244, 0x432AFF97, 0xAB9423A7, 0xFC93A039,
    0x655B59C3, 0x8F0CCC92, 0xFFEFF47D, 0x85845DD1,
    0x6FA87E4F, 0xFE2CE6E0, 0xA3014314, 0x4E0811A1,
    0xF7537E82, 0xBD3AF235, 0x2AD7D2BB, 0xEB86D391,
)

_SHIFTS = (
    (7, 12, 17, 22) * 4
    + (5, 9, 14, 20) * 4
    + (4, 11, 16, 23) * 4
    + (6, 10, 15, 21) * 4
)

_INDEX = (
    tuple(range(16))
    + tuple((1 + 5 * i) % 16 for i in range(16))
    + tuple((5 + 3 * i) % 16 for i in range(16))
    + tuple((7 * i) % 16 for i in range(16))
)

_WORDS = struct.Struct("<16I")

BytesLike = Union[bytes, bytearray, memoryview]


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _MASK32


def _compress(state: tuple[int, int, int, int], block: bytes) -> tuple[int, int, int, int]:
    x = _WORDS.unpack(block)
    a, b, c, d = state
    for i in range(64):
        round_no = i >> 4
        if round_no == 0:
            f = (b & c) | (~b & d)
        elif round_no == 1:
            f = (b & d) | (c & ~d)
        elif round_no == 2:
            f = b ^ c ^ d
        else:
            f = c ^ (b | (~d & _MASK32))
        f &= _MASK32
        rotated = _rotl((a + f + x[_INDEX[i]] + _T[i]) & _MASK32, _SHIFTS[i])
        a, b, c, d = d, (b + rotated) & _MASK32, b, c
    return (
        (state[0] + a) & _MASK32,
        (state[1] + b) & _MASK32,
        (state[2] + c) & _MASK32,
        (state[3] + d) & _MASK32,
    )


class MD5:
    """An incremental MD5 hash; ``digest`` may be called at any point."""

    digest_size = MD5_DIGEST_LEN
    block_size = _BLOCK_SIZE

    def __init__(self, data: BytesLike = b"") -> None:
        self._state = _INIT
        self._buf = b""
        self._size = 0
        if data:
            self.update(data)

    def update(self, data: BytesLike) -> None:
        """Feed more bytes into the hash."""
        data = bytes(data)
        self._size = (self._size + len(data)) & _MASK64
        buf = self._buf + data
        whole = len(buf) - len(buf) % _BLOCK_SIZE
        state = self._state
        for start in range(0, whole, _BLOCK_SIZE):
            state = _compress(state, buf[start:start + _BLOCK_SIZE])
        self._state = state
        self._buf = buf[whole:]

    def digest(self) -> bytes:
        """Return the 16-byte digest of everything fed so far."""
        tail = self._buf + b"\x80"
        if len(tail) > _BLOCK_SIZE - 8:
            tail = tail.ljust(_BLOCK_SIZE * 2 - 8, b"\0")
        else:
            tail = tail.ljust(_BLOCK_SIZE - 8, b"\0")
        tail += struct.pack("<Q", (self._size * 8) & _MASK64)
        state = self._state
        for start in range(0, len(tail), _BLOCK_SIZE):
            state = _compress(state, tail[start:start + _BLOCK_SIZE])
        return struct.pack("<4I", *state)

    def hexdigest(self) -> str:
        """Return the digest as lower-case hex."""
        return md5str(self.digest())


def md5(data: BytesLike) -> bytes:
    """Return the MD5 digest of ``data``."""
    return MD5(data).digest()


def md5str(digest: BytesLike) -> str:
    """Return a 16-byte digest as 32 lower-case hex characters."""
    digest = bytes(digest)
    if len(digest) != MD5_DIGEST_LEN:
        raise ValueError(f"MD5 digest must be {MD5_DIGEST_LEN} bytes")
    return digest.hex()


def md5sum_fileobj(fileobj: BinaryIO) -> bytes:
    """Return the MD5 digest of everything left to read in a binary file."""
    ctx = MD5()
    while True:
        chunk = fileobj.read(_READ_SIZE)
        if not chunk:
            break
        ctx.update(chunk)
    return ctx.digest()


def md5sum(fname: Union[str, "os.PathLike[str]"]) -> bytes:
    """Return the MD5 digest of the named file."""
    with open(fname, "rb") as fileobj:
        return md5sum_fileobj(fileobj)


import os  # noqa: E402  (used only in the annotation above)