"""Data models for representing documentation content units."""

from dataclasses import dataclass

MANUAL_PAGE = "ManualPage"
GENERATED_API_MEMBER = "GeneratedApiMember"


@dataclass(frozen=True)
class ContentUnit:
    """Represents one manual page or one generated API member description."""

    uid: str
    kind: str  # ManualPage/GeneratedApiMember
    source_path: str  # file path, or fully-qualified symbol name
    raw_body: str
    title: str
    parent: str | None = None  # owning type uid for generated members


def is_api_member_kind(kind: str) -> bool:
    """Check if the kind represents a generated API member."""
    return kind == GENERATED_API_MEMBER
