"""Shell-style file name matching with POSIX classes and ksh extended patterns.

``fnmatch`` supports ``*``, ``?``, bracket expressions (ranges, ``!``/``^``
negation, ``[:class:]`` names), backslash escapes and, with
``FnmFlag.EXTMATCH``, the ``?(..)``, ``*(..)``, ``+(..)``, ``@(..)`` and
``!(..)`` pattern lists.
"""

from __future__ import annotations

import enum
import string as _strmod
from dataclasses import dataclass
from typing import Callable, Optional

FNM_NOMATCH = 1

_NUL = "\0"
_PAD = _NUL * 4
_CHAR_CLASS_MAX_LENGTH = 6

_MATCH = 0
_INVALID = -1


class FnmFlag(enum.IntFlag):
    """Bits accepted in the ``flags`` argument of :func:`fnmatch`."""

    NONE = 0
    PATHNAME = 1 << 0
    FILE_NAME = 1 << 0
    NOESCAPE = 1 << 1
    PERIOD = 1 << 2
    LEADING_DIR = 1 << 3
    CASEFOLD = 1 << 4
    EXTMATCH = 1 << 5


_CLASSES = {
    "alnum": frozenset(_strmod.ascii_letters + _strmod.digits),
    "alpha": frozenset(_strmod.ascii_letters),
    "blank": frozenset(" \t"),
    "cntrl": frozenset([chr(i) for i in range(32)] + ["\x7f"]),
    "digit": frozenset(_strmod.digits),
    "graph": frozenset(chr(i) for i in range(33, 127)),
    "lower": frozenset(_strmod.ascii_lowercase),
    "print": frozenset(chr(i) for i in range(32, 127)),
    "punct": frozenset(_strmod.punctuation),
    "space": frozenset(" \t\n\v\f\r"),
    "upper": frozenset(_strmod.ascii_uppercase),
    "xdigit": frozenset(_strmod.hexdigits),
}


@dataclass
class _Ends:
    pattern: Optional[int] = None
    string: int = 0
    nlp: bool = False


def _folder(flags: int) -> Callable[[str], str]:
    if flags & FnmFlag.CASEFOLD:
        return lambda ch: ch.lower() if "A" <= ch <= "Z" else ch
    return lambda ch: ch


def _no_leading_period(flags: int) -> bool:
    both = FnmFlag.PATHNAME | FnmFlag.PERIOD
    return (flags & both) == both


def _sub_flags(flags: int) -> int:
    return flags if flags & FnmFlag.PATHNAME else flags & ~FnmFlag.PERIOD


def _end_of_pattern(pat: str, start: int) -> int:
    """Return the index just past the ``)`` closing the list at ``start``."""
    p = start
    while True:
        p += 1
        ch = pat[p]
        if ch == _NUL:
            return start
        if ch == "[":
            p += 1
            if pat[p] in "!^":
                p += 1
            if pat[p] == "]":
                p += 1
            while pat[p] != "]":
                if pat[p] == _NUL:
                    return start
                p += 1
        elif ch in "?*+@!" and pat[p + 1] == "(":
            p = _end_of_pattern(pat, p + 1)
        elif ch == ")":
            return p + 1


def _ext(opt: str, pat: str, lparen: int, s: str, n: int, end: int,
         nlp: bool, flags: int) -> int:
    alternatives: list[str] = []
    level = 0
    startp = p = lparen + 1
    while level >= 0:
        ch = pat[p]
        if ch == _NUL:
            return _INVALID
        if ch == "[":
            p += 1
            if pat[p] in "!^":
                p += 1
            if pat[p] == "]":
                p += 1
            while pat[p] != "]":
                if pat[p] == _NUL:
                    return _INVALID
                p += 1
        elif ch in "?*+@!" and pat[p + 1] == "(":
            level += 1
        elif ch == ")":
            if level == 0:
                alternatives.append(pat[startp:p])
            level -= 1
        elif ch == "|" and level == 0:
            alternatives.append(pat[startp:p])
            startp = p + 1
        p += 1

    rest_end = pat.index(_NUL, p)
    rest = pat[p:rest_end]
    sub = _sub_flags(flags)

    def rest_nlp(rs: int) -> bool:
        if rs == n:
            return nlp
        return s[rs - 1] == "/" and _no_leading_period(flags)

    if opt in "*+":
        if opt == "*" and _fct(pat, p, s, n, end, nlp, flags, None) == _MATCH:
            return _MATCH
        for alt in alternatives:
            alt_pat = alt + _PAD
            for rs in range(n, end + 1):
                if _fct(alt_pat, 0, s, n, rs, nlp, sub, None) != _MATCH:
                    continue
                after = rest_nlp(rs)
                if _fct(pat, p, s, rs, end, after, sub, None) == _MATCH:
                    return _MATCH
                if rs != n and _fct(pat, lparen - 1, s, rs, end, after, sub, None) == _MATCH:
                    return _MATCH
        return FNM_NOMATCH

    if opt in "?@":
        if opt == "?" and _fct(pat, p, s, n, end, nlp, flags, None) == _MATCH:
            return _MATCH
        for alt in alternatives:
            if _fct(alt + rest + _PAD, 0, s, n, end, nlp, sub, None) == _MATCH:
                return _MATCH
        return FNM_NOMATCH

    if opt == "!":
        alt_pats = [alt + _PAD for alt in alternatives]
        for rs in range(n, end + 1):
            if any(_fct(a, 0, s, n, rs, nlp, sub, None) == _MATCH for a in alt_pats):
                continue
            if _fct(pat, p, s, rs, end, rest_nlp(rs), sub, None) == _MATCH:
                return _MATCH
        return FNM_NOMATCH

    return _INVALID


_BR_CONTINUE = 0
_BR_LITERAL = 2


def _bracket(pat: str, p: int, s: str, n: int, end: int, nlp: bool,
             flags: int, fold: Callable[[str], str]) -> tuple[int, int]:
    """Match one bracket expression; ``p`` points just past the ``[``."""
    p_init = p
    noesc = flags & FnmFlag.NOESCAPE
    if n == end:
        return FNM_NOMATCH, p
    ch = s[n]
    if ch == "." and nlp:
        return FNM_NOMATCH, p
    if ch == "/" and flags & FnmFlag.PATHNAME:
        return FNM_NOMATCH, p

    negate = pat[p] in "!^"
    if negate:
        p += 1
    fn = fold(ch)

    c = pat[p]
    p += 1
    matched = False
    while True:
        bracket_char: Optional[str] = None
        if not noesc and c == "\\":
            if pat[p] == _NUL:
                return FNM_NOMATCH, p
            bracket_char = fold(pat[p])
            p += 1
        elif c == "[" and pat[p] == ":":
            startp = p
            name = ""
            while True:
                if len(name) == _CHAR_CLASS_MAX_LENGTH:
                    return FNM_NOMATCH, p
                p += 1
                c = pat[p]
                if c == ":" and pat[p + 1] == "]":
                    p += 2
                    break
                if c < "a" or c >= "z":
                    p = startp
                    bracket_char = "["
                    break
                name += c
            if bracket_char is None:
                members = _CLASSES.get(name)
                if members is not None and ch in members:
                    matched = True
                    break
                c = pat[p]
                p += 1
        elif c == _NUL:
            return _BR_LITERAL, p_init
        else:
            bracket_char = fold(c)

        if bracket_char is not None:
            c = bracket_char
            is_range = pat[p] == "-" and pat[p + 1] not in (_NUL, "]")
            if not is_range and c == fn:
                matched = True
                break
            cold = c
            c = pat[p]
            p += 1
            if c == "-" and pat[p] != "]":
                cend = pat[p]
                p += 1
                if not noesc and cend == "\\":
                    cend = pat[p]
                    p += 1
                if cend == _NUL:
                    return FNM_NOMATCH, p
                if cold <= fn <= cend:
                    matched = True
                    break
                c = pat[p]
                p += 1

        if c == "]":
            break

    if not matched:
        return (_BR_CONTINUE if negate else FNM_NOMATCH), p

    # Skip the rest of the bracket expression that already matched.
    while True:
        c = pat[p]
        p += 1
        if c == _NUL:
            return FNM_NOMATCH, p
        if not noesc and c == "\\":
            if pat[p] == _NUL:
                return FNM_NOMATCH, p
            p += 1
        elif c == "[" and pat[p] == ":":
            count = 0
            startp = p
            restart = False
            while True:
                p += 1
                c = pat[p]
                count += 1
                if count == _CHAR_CLASS_MAX_LENGTH:
                    return FNM_NOMATCH, p
                if pat[p] == ":" and pat[p + 1] == "]":
                    break
                if c < "a" or c >= "z":
                    p = startp
                    restart = True
                    break
            if restart:
                continue
            p += 2
            c = pat[p]
            p += 1
        elif c == "[" and pat[p] == "=":
            p += 1
            c = pat[p]
            if c == _NUL:
                return FNM_NOMATCH, p
            p += 1
            c = pat[p]
            if c != "=" or pat[p + 1] != "]":
                return FNM_NOMATCH, p
            p += 2
            c = pat[p]
            p += 1
        elif c == "[" and pat[p] == ".":
            p += 1
            while True:
                p += 1
                c = pat[p]
                if c == _NUL:
                    return FNM_NOMATCH, p
                if pat[p] == "." and pat[p + 1] == "]":
                    break
            p += 2
            c = pat[p]
            p += 1
        if c == "]":
            break

    return (FNM_NOMATCH if negate else _BR_CONTINUE), p


def _fct(pat: str, p: int, s: str, n: int, end: int, nlp: bool,
         flags: int, ends: Optional[_Ends]) -> int:
    ext = flags & FnmFlag.EXTMATCH
    pathname = flags & FnmFlag.PATHNAME
    noesc = flags & FnmFlag.NOESCAPE
    fold = _folder(flags)

    while True:
        c = pat[p]
        p += 1
        if c == _NUL:
            break
        new_nlp = False
        c = fold(c)

        if c == "?":
            if ext and pat[p] == "(":
                res = _ext(c, pat, p, s, n, end, nlp, flags)
                if res != _INVALID:
                    return res
            if n == end:
                return FNM_NOMATCH
            if s[n] == "/" and pathname:
                return FNM_NOMATCH
            if s[n] == "." and nlp:
                return FNM_NOMATCH

        elif c == "\\":
            if not noesc:
                c = pat[p]
                p += 1
                if c == _NUL:
                    return FNM_NOMATCH
                c = fold(c)
            if n == end or fold(s[n]) != c:
                return FNM_NOMATCH

        elif c == "*":
            if ext and pat[p] == "(":
                res = _ext(c, pat, p, s, n, end, nlp, flags)
                if res != _INVALID:
                    return res
            elif ends is not None:
                ends.pattern = p - 1
                ends.string = n
                ends.nlp = nlp
                return _MATCH

            if n != end and s[n] == "." and nlp:
                return FNM_NOMATCH

            c = pat[p]
            p += 1
            while c in "?*":
                if pat[p] == "(" and ext:
                    endp = _end_of_pattern(pat, p)
                    if endp != p:
                        p = endp
                        c = pat[p]
                        p += 1
                        continue
                if c == "?":
                    if n == end:
                        return FNM_NOMATCH
                    if s[n] == "/" and pathname:
                        return FNM_NOMATCH
                    n += 1
                c = pat[p]
                p += 1

            if c == _NUL:
                if not pathname or flags & FnmFlag.LEADING_DIR:
                    return _MATCH
                return FNM_NOMATCH if "/" in s[n:end] else _MATCH

            found_ends = _Ends()
            endp = end
            if pathname:
                slash = s.find("/", n, end)
                if slash >= 0:
                    endp = slash

            found = False
            if c == "[" or (ext and c in "@+!" and pat[p] == "("):
                sub = _sub_flags(flags)
                p -= 1
                while n < endp:
                    if _fct(pat, p, s, n, end, nlp, sub, found_ends) == _MATCH:
                        found = True
                        break
                    n += 1
                    nlp = False
            elif c == "/" and pathname:
                while n < end and s[n] != "/":
                    n += 1
                if (n < end and s[n] == "/"
                        and _fct(pat, p, s, n + 1, end, bool(flags & FnmFlag.PERIOD),
                                 flags, None) == _MATCH):
                    return _MATCH
                return FNM_NOMATCH
            else:
                sub = _sub_flags(flags)
                if c == "\\" and not noesc:
                    c = pat[p]
                c = fold(c)
                p -= 1
                while n < endp:
                    if fold(s[n]) == c and _fct(pat, p, s, n, end, nlp, sub,
                                                found_ends) == _MATCH:
                        found = True
                        break
                    n += 1
                    nlp = False

            if not found:
                return FNM_NOMATCH
            if found_ends.pattern is None:
                return _MATCH
            p = found_ends.pattern
            n = found_ends.string
            nlp = found_ends.nlp
            continue

        elif c == "[":
            status, p = _bracket(pat, p, s, n, end, nlp, flags, fold)
            if status == FNM_NOMATCH:
                return FNM_NOMATCH
            if status == _BR_LITERAL and (n == end or fold(s[n]) != "["):
                return FNM_NOMATCH

        elif c in "+@!":
            if ext and pat[p] == "(":
                res = _ext(c, pat, p, s, n, end, nlp, flags)
                if res != _INVALID:
                    return res
            if n == end or c != fold(s[n]):
                return FNM_NOMATCH

        elif c == "/" and _no_leading_period(flags):
            if n == end or c != s[n]:
                return FNM_NOMATCH
            new_nlp = True

        else:
            if n == end or c != fold(s[n]):
                return FNM_NOMATCH

        nlp = new_nlp
        n += 1

    if n == end:
        return _MATCH
    if flags & FnmFlag.LEADING_DIR and s[n] == "/":
        return _MATCH
    return FNM_NOMATCH


def fnmatch(pattern: str, string: str, flags: int = 0) -> bool:
    """Return True if ``string`` matches the shell pattern ``pattern``."""
    flags = int(flags)
    pattern = pattern.split(_NUL, 1)[0]
    string = string.split(_NUL, 1)[0]
    result = _fct(pattern + _PAD, 0, string, 0, len(string),
                  bool(flags & FnmFlag.PERIOD), flags, None)
    return result == _MATCH