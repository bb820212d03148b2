"""Data models for representing link targets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LinkTarget:
    """Represents the page a resolved cross-reference points at."""

    title: str
    page_path: str  # site path, e.g. /api/ReqRest-RestClient
