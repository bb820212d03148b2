"""Tests for lexical reference extraction."""

from docxref.reference import AT, CODE, XREF, XREF_LINK, XREF_TAG
from docxref.reference_extractor import ReferenceExtractor
from docxref.resolution_state import UNRESOLVED
from factories import manual


def extract(body: str, rules: dict | None = None) -> list:
    """Extract references from a manual page with the given body."""
    extractor = ReferenceExtractor({"rules": rules or {}})
    return extractor.extract(manual("page", body))


def test_extracts_every_syntax_in_offset_order() -> None:
    """Verify all explicit syntaxes and inline code are found in order."""
    body = (
        "See xref:guides. Also <xref:ReqRest.RestClient?text=client#ctor> and "
        '[the guide](xref:getting_started) plus @"ReqRest.RestClient" and '
        "`ReqRest.RestClient.Get`."
    )
    refs = extract(body)

    assert [(r.syntax_kind, r.target_token) for r in refs] == [
        (XREF, "guides"),
        (XREF_TAG, "ReqRest.RestClient"),
        (XREF_LINK, "getting_started"),
        (AT, "ReqRest.RestClient"),
        (CODE, "ReqRest.RestClient.Get"),
    ]
    assert [r.location_offset for r in refs] == sorted(r.location_offset for r in refs)
    assert all(r.owner_uid == "page" for r in refs)
    assert all(r.resolution_state.status == UNRESOLVED for r in refs)

    bare = refs[0]
    assert bare.location_offset == body.index("xref:guides")
    assert body[bare.location_offset : bare.end_offset] == "xref:guides"

    tag = refs[1]
    assert tag.link_text == "client"
    assert tag.anchor == "ctor"
    assert body[tag.location_offset : tag.end_offset] == (
        "<xref:ReqRest.RestClient?text=client#ctor>"
    )

    link = refs[2]
    assert link.link_text == "the guide"
    assert body[link.location_offset : link.end_offset] == (
        "[the guide](xref:getting_started)"
    )


def test_masked_regions_are_skipped() -> None:
    """Verify fenced blocks, inline code and comments hide xref syntax."""
    body = (
        "```csharp\nvar s = \"xref:InCode\";\n```\n"
        "Inline `xref:Literal` stays.\n"
        "<!-- xref:Hidden -->\n"
        "Real xref:Visible"
    )
    refs = extract(body)
    assert [r.target_token for r in refs] == ["Visible"]


def test_email_is_not_an_at_reference() -> None:
    """Verify an address like user@example.com is not a reference."""
    assert extract("Write to user@example.com for help.") == []


def test_trailing_punctuation_is_not_part_of_token() -> None:
    """Verify sentence punctuation after a token is left out."""
    refs = extract("Use @ReqRest.RestClient. Or xref:guides, then stop.")
    assert [r.target_token for r in refs] == ["ReqRest.RestClient", "guides"]


def test_member_signature_token() -> None:
    """Verify a parenthesized member signature is one token."""
    refs = extract("Call xref:N.C.M(int, string) first.")
    assert [r.target_token for r in refs] == ["N.C.M(int, string)"]


def test_display_full_name_query() -> None:
    """Verify displayProperty=fullName is recorded on the reference."""
    refs = extract("<xref:A.B?displayProperty=fullName>")
    assert refs[0].display_full_name
    assert refs[0].link_text == ""


def test_informal_references_can_be_disabled() -> None:
    """Verify inline code is ignored when informal references are off."""
    body = "`A.B` and xref:C"
    assert [r.syntax_kind for r in extract(body)] == [CODE, XREF]
    refs = extract(body, {"informal_references": False})
    assert [r.syntax_kind for r in refs] == [XREF]


def test_at_references_can_be_disabled() -> None:
    """Verify @ shorthand is ignored when disabled."""
    assert extract("@A.B", {"at_references": False}) == []


def test_code_pattern_is_configurable() -> None:
    """Verify a custom pattern decides which inline code is a reference."""
    rules = {"code_reference_pattern": r"^[A-Z]\w+$"}
    refs = extract("`Foo` and `foo.bar`", rules)
    assert [r.target_token for r in refs] == ["Foo"]


def test_link_with_title() -> None:
    """Verify a quoted link title stays part of the xref link span."""
    body = '[t](xref:b "T") and [u](xref:c#ctor \'U\')'
    refs = extract(body)

    assert [(r.syntax_kind, r.target_token, r.link_title) for r in refs] == [
        (XREF_LINK, "b", '"T"'),
        (XREF_LINK, "c", "'U'"),
    ]
    assert refs[0].length == len('[t](xref:b "T")')
    assert refs[1].anchor == "ctor"


def test_unclosed_fence_masks_to_end_of_body() -> None:
    """Verify a fence without a closing line hides everything after it."""
    assert extract("```\nxref:b\n") == []
    refs = extract("Intro xref:a\n~~~text\n@B.C and xref:b")
    assert [r.target_token for r in refs] == ["a"]
