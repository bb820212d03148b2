"""Tests for uid normalization and alias derivation."""

from docxref.uid_keys import (
    alias_keys,
    normalize_token,
    short_name,
    split_qualified,
    split_signature,
)


def test_normalize_token() -> None:
    """Verify whitespace, escaping and global:: prefixes are normalized away."""
    assert normalize_token(" N.C.M(int, string) ") == "N.C.M(int,string)"
    assert normalize_token("global::N.C") == "N.C"
    assert normalize_token("N.C.M%2A") == "N.C.M*"
    assert normalize_token("getting_started") == "getting_started"


def test_split_signature() -> None:
    """Verify the parameter list is split from the qualified name."""
    assert split_signature("N.C.M(System.String)") == ("N.C.M", "(System.String)")
    assert split_signature("N.C") == ("N.C", "")
    assert split_signature("N.List<T>.Add(T)") == ("N.List<T>.Add", "(T)")


def test_split_qualified_ignores_dots_in_brackets() -> None:
    """Verify dots inside generic or parameter brackets do not split."""
    assert split_qualified("N.Dictionary{K.A,V}.M") == ["N", "Dictionary{K.A,V}", "M"]
    assert split_qualified("A.B.C") == ["A", "B", "C"]


def test_alias_keys_plain_member() -> None:
    """Verify a qualified member is reachable by its shorter suffixes."""
    assert alias_keys("Namespace.Class.Method") == ["Class.Method", "Method"]


def test_alias_keys_signature() -> None:
    """Verify members with parameters also yield parameterless aliases."""
    assert alias_keys("N.C.M(int)") == ["C.M(int)", "M(int)", "N.C.M", "C.M", "M"]


def test_alias_keys_unqualified() -> None:
    """Verify an unqualified uid has no aliases."""
    assert alias_keys("Single") == []


def test_short_name() -> None:
    """Verify the short name drops qualifiers and the signature."""
    assert short_name("N.C.M(int)") == "M"
    assert short_name("ReqRest.RestClient") == "RestClient"
