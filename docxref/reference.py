"""Data models for cross-references found inside content unit bodies."""

from dataclasses import dataclass, field

from docxref.resolution_state import ResolutionState

# Syntax kinds, in the order the extractor tries them at a given position.
XREF_TAG = "xref_tag"  # <xref:Uid>
XREF_LINK = "xref_link"  # [text](xref:Uid)
XREF = "xref"  # xref:Uid
AT = "at"  # @Uid or @"Uid"
CODE = "code"  # `Namespace.Type`

EXPLICIT_KINDS = frozenset({XREF_TAG, XREF_LINK, XREF, AT})


@dataclass(frozen=True)
class Reference:
    """One occurrence of a cross-reference inside a unit's raw body."""

    owner_uid: str
    target_token: str
    location_offset: int
    length: int  # span of the whole reference syntax in the raw body
    syntax_kind: str
    resolution_state: ResolutionState = field(default_factory=ResolutionState.unresolved)
    anchor: str = ""
    link_text: str = ""  # explicit text from [text](xref:...) or ?text=
    display_full_name: bool = False  # ?displayProperty=fullName
    link_title: str = ""  # quoted title from [text](xref:Uid "title")

    @property
    def end_offset(self) -> int:
        """Offset just past the reference span."""
        return self.location_offset + self.length

    @property
    def is_explicit(self) -> bool:
        """Whether the author wrote an explicit xref rather than inline code."""
        return self.syntax_kind in EXPLICIT_KINDS
