import fnmatch as stdlib_fnmatch
import itertools

import pytest

from samlib.globmatch import FnmFlag, fnmatch

PATTERNS = ["*", "?", "a*", "*.c", "a?c", "[abc]", "[!abc]", "[a-c]x",
            "*[0-9]", "a*b*c", "[]]", "[!]]a", "*a", "??"]
STRINGS = ["", "a", "abc", "x.c", "b", "bx", "d", "abc7", "aXbYc", "]",
           "xa", "]a", "a/c", "ab"]


@pytest.mark.parametrize("pattern,name", list(itertools.product(PATTERNS, STRINGS)))
def test_agrees_with_stdlib_for_plain_patterns(pattern, name):
    assert fnmatch(pattern, name) == stdlib_fnmatch.fnmatchcase(name, pattern)


def test_pathname_stops_wildcards_at_slash():
    assert fnmatch("*", "a/b")
    assert not fnmatch("*", "a/b", FnmFlag.PATHNAME)
    assert fnmatch("*/b", "a/b", FnmFlag.PATHNAME)
    assert not fnmatch("a?b", "a/b", FnmFlag.PATHNAME)
    assert not fnmatch("a[/]b", "a/b", FnmFlag.PATHNAME)


def test_period_flag():
    assert fnmatch("*", ".hidden")
    assert not fnmatch("*", ".hidden", FnmFlag.PERIOD)
    assert not fnmatch("?hidden", ".hidden", FnmFlag.PERIOD)
    flags = FnmFlag.PATHNAME | FnmFlag.PERIOD
    assert not fnmatch("a/*", "a/.x", flags)
    assert fnmatch("a/.*", "a/.x", flags)
    assert fnmatch("a/*", "a/.x", FnmFlag.PATHNAME)


def test_backslash_escapes():
    assert fnmatch(r"\*", "*")
    assert not fnmatch(r"\*", "a")
    assert not fnmatch("abc\\", "abc\\")
    assert fnmatch(r"\*", "\\abc", FnmFlag.NOESCAPE)


def test_escape_inside_bracket():
    assert fnmatch(r"[\]]", "]")
    assert not fnmatch(r"[\]]", "x")


def test_casefold():
    assert not fnmatch("*.TXT", "file.txt")
    assert fnmatch("*.TXT", "file.txt", FnmFlag.CASEFOLD)
    assert fnmatch("ABC", "abc", FnmFlag.CASEFOLD)


def test_leading_dir():
    flags = FnmFlag.PATHNAME | FnmFlag.LEADING_DIR
    assert fnmatch("foo*", "foobar/frobozz", flags)
    assert not fnmatch("foo*", "foobar/frobozz", FnmFlag.PATHNAME)
    assert fnmatch("foo", "foo/bar", FnmFlag.LEADING_DIR)


def test_character_classes():
    assert fnmatch("[[:digit:]]x", "5x")
    assert not fnmatch("[[:digit:]]x", "ax")
    assert fnmatch("[![:alpha:]]", "1")
    assert not fnmatch("[![:alpha:]]", "q")
    assert fnmatch("[[:space:][:upper:]]", "Q")
    assert fnmatch("[[:xdigit:]]", "f")
    assert not fnmatch("[[:xdigit:]]", "g")


def test_unterminated_bracket_is_literal():
    assert fnmatch("[ab", "[ab")
    assert not fnmatch("[ab", "a")


def test_unterminated_range_never_matches():
    assert not fnmatch("[a-", "[a-")


def test_extmatch_at_alternatives():
    flags = FnmFlag.EXTMATCH
    assert fnmatch("@(foo|bar).c", "foo.c", flags)
    assert fnmatch("@(foo|bar).c", "bar.c", flags)
    assert not fnmatch("@(foo|bar).c", "baz.c", flags)


def test_extmatch_repetition():
    flags = FnmFlag.EXTMATCH
    assert fnmatch("+(ab)", "ababab", flags)
    assert not fnmatch("+(ab)", "", flags)
    assert fnmatch("*(ab)c", "c", flags)
    assert fnmatch("*(ab)c", "ababc", flags)
    assert not fnmatch("*(ab)c", "abac", flags)


def test_extmatch_optional_and_negation():
    flags = FnmFlag.EXTMATCH
    assert fnmatch("?(x)y", "y", flags)
    assert fnmatch("?(x)y", "xy", flags)
    assert not fnmatch("?(x)y", "xxy", flags)
    assert fnmatch("!(foo).c", "bar.c", flags)
    assert not fnmatch("!(foo).c", "foo.c", flags)


def test_extmatch_after_star():
    flags = FnmFlag.EXTMATCH
    assert fnmatch("*.@(c|h)", "x.h", flags)
    assert not fnmatch("*.@(c|h)", "x.o", flags)


def test_ext_syntax_is_literal_without_flag():
    assert fnmatch("@(foo)", "@(foo)")
    assert not fnmatch("@(foo)", "foo")


def test_invalid_ext_pattern_is_literal():
    assert fnmatch("@(foo", "@(foo", FnmFlag.EXTMATCH)


def test_star_before_bracket():
    assert fnmatch("*[0-9]", "abc7")
    assert not fnmatch("*[0-9]", "abcx")


def test_empty_pattern_only_matches_empty_string():
    assert fnmatch("", "")
    assert not fnmatch("", "a")