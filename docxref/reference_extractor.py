"""Logic for lexically extracting cross-references from content bodies."""

import re
from typing import Any
from urllib.parse import parse_qs

from docxref.content_unit import ContentUnit
from docxref.reference import AT, CODE, XREF, XREF_LINK, XREF_TAG, Reference

# One uid segment: identifier chars, generic markers, or a {T,U} brace group.
_SEGMENT = r"(?:[\w`+*~\-]|\{[^{}\s]*\})+"
# Dotted segments with an optional parameter list; never ends on a dot.
_TOKEN = _SEGMENT + r"(?:\." + _SEGMENT + r")*(?:\([^()\n]*\))?"

DEFAULT_CODE_PATTERN = r"^[A-Za-z_][\w`{}]*(?:\.[A-Za-z_][\w`{}]*)+(?:\([^()]*\))?$"

REFERENCE_RE = re.compile(
    # Masked regions: nothing inside them is a reference.
    # An unclosed fence runs to the end of the body.
    r"(?P<fence>^[ \t]*(?P<fence_mark>```|~~~)[^\n]*(?:\n[\s\S]*?)?"
    r"(?:\n[ \t]*(?P=fence_mark)[ \t]*$|\Z))"
    r"|(?P<comment><!--[\s\S]*?-->)"
    r"|(?P<code>(?P<ticks>`+)(?P<code_body>[^\n]+?)(?<!`)(?P=ticks)(?!`))"
    # <xref:Uid?query#anchor>
    r"|(?P<tag><xref:(?P<tag_uid>[^?>#\s]+)"
    r"(?:\?(?P<tag_query>[^>#]*))?(?:#(?P<tag_anchor>[^>]*))?>)"
    # [text](xref:Uid?query#anchor "title")
    r"|(?P<link>\[(?P<link_text>[^\]\n]*)\]\(<?xref:(?P<link_uid>[^)?#\s>]+)"
    r"(?:\?(?P<link_query>[^)#\s>]*))?(?:#(?P<link_anchor>[^)\s>]*))?>?"
    r"(?:[ \t]+(?P<link_title>\"[^\"\n]*\"|'[^'\n]*'))?[ \t]*\))"
    # xref:Uid in running text
    r"|(?P<bare>(?<![\w/:@])xref:(?P<bare_uid>" + _TOKEN + r")"
    r"(?:\?(?P<bare_query>[\w=&%.\-]+))?(?:#(?P<bare_anchor>[\w\-]+))?)"
    # @Uid, @"Uid" or @'Uid'
    r"|(?P<at>(?<![\w@`])@(?:\"(?P<at_dquoted>[^\"\n]+)\"|'(?P<at_squoted>[^'\n]+)'"
    r"|(?P<at_uid>(?=[A-Za-z_])" + _TOKEN + r")))",
    re.MULTILINE,
)


def _parse_query(query: str | None) -> tuple[str, bool]:
    """Return the ``text`` override and whether ``displayProperty=fullName`` is set."""
    if not query:
        return "", False
    params = parse_qs(query)
    text = (params.get("text") or [""])[0]
    display = (params.get("displayProperty") or [""])[0]
    return text, display.lower() == "fullname"


class ReferenceExtractor:
    """Scans raw bodies for explicit xrefs and informal inline-code references."""

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize the extractor from the ``rules`` section of the config."""
        rules = config.get("rules", {})
        self.informal_references = rules.get("informal_references", True)
        self.at_references = rules.get("at_references", True)
        self.code_pattern = re.compile(
            rules.get("code_reference_pattern") or DEFAULT_CODE_PATTERN
        )

    def extract(self, unit: ContentUnit) -> list[Reference]:
        """Return the references in a unit's body, ordered by offset."""
        refs = []
        for m in REFERENCE_RE.finditer(unit.raw_body):
            ref = self._reference_for(unit.uid, m)
            if ref is not None:
                refs.append(ref)
        return refs

    def _reference_for(self, owner_uid: str, m: re.Match) -> Reference | None:
        start = m.start()
        length = m.end() - m.start()

        if m.group("fence") is not None or m.group("comment") is not None:
            return None

        if m.group("code") is not None:
            body = m.group("code_body").strip()
            if not self.informal_references or not self.code_pattern.match(body):
                return None
            return Reference(owner_uid, body, start, length, CODE)

        if m.group("tag") is not None:
            text, full = _parse_query(m.group("tag_query"))
            return Reference(
                owner_uid,
                m.group("tag_uid"),
                start,
                length,
                XREF_TAG,
                anchor=m.group("tag_anchor") or "",
                link_text=text,
                display_full_name=full,
            )

        if m.group("link") is not None:
            text, full = _parse_query(m.group("link_query"))
            return Reference(
                owner_uid,
                m.group("link_uid"),
                start,
                length,
                XREF_LINK,
                anchor=m.group("link_anchor") or "",
                link_text=m.group("link_text") or text,
                display_full_name=full,
                link_title=m.group("link_title") or "",
            )

        if m.group("bare") is not None:
            text, full = _parse_query(m.group("bare_query"))
            return Reference(
                owner_uid,
                m.group("bare_uid"),
                start,
                length,
                XREF,
                anchor=m.group("bare_anchor") or "",
                link_text=text,
                display_full_name=full,
            )

        if not self.at_references:
            return None
        token = m.group("at_dquoted") or m.group("at_squoted") or m.group("at_uid")
        return Reference(owner_uid, token, start, length, AT)
