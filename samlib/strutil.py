"""Bounded string copying and concatenation.

Sizes are buffer sizes that include room for a terminator, so at most
``size - 1`` characters are ever kept.
"""

from __future__ import annotations


def strlcpy(src: str, dstsize: int) -> tuple[str, int]:
    """Copy ``src`` into a buffer of ``dstsize``.

    Returns the copied text and the length of ``src``; a result length
    below that means the copy was truncated.
    """
    if dstsize <= 0:
        return "", len(src)
    return src[: dstsize - 1], len(src)


def strlcat(dst: str, src: str, dstsize: int) -> tuple[str, int]:
    """Append ``src`` to ``dst`` within a buffer of ``dstsize``.

    Returns the new text and ``len(dst) + len(src)``.
    """
    left = dstsize - len(dst)
    total = len(dst) + len(src)
    if left > 0:
        return dst + src[: left - 1], total
    return dst, total


def safecpy(src: str, dstsize: int) -> tuple[str, int]:
    """Copy ``src`` into a buffer of ``dstsize``; returns the text and chars copied."""
    if dstsize <= 0:
        return "", 0
    copied = src[: dstsize - 1]
    return copied, len(copied)


def safecat(dst: str, src: str, dstsize: int) -> tuple[str, int]:
    """Append ``src`` to ``dst`` within ``dstsize``; returns the text and chars copied."""
    if dstsize <= 0:
        return dst, 0
    copied, n = safecpy(src, dstsize - len(dst))
    return dst + copied, n


def strconcat(size: int, *args: str) -> str:
    """Concatenate ``args`` into a buffer of ``size``, truncating as needed."""
    if size < 0:
        raise ValueError("size must not be negative")
    if size == 0:
        return ""
    return "".join(args)[: size - 1]