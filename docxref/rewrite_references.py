"""Logic for rewriting resolved cross-references into Markdown links."""

import string

from docxref.link_target import LinkTarget
from docxref.reference import CODE, Reference

DEFAULT_UNRESOLVED_TAG = "<!-- xref {status}: {token} -->"
UNRESOLVED_TAG_FIELDS = frozenset({"status", "token"})


def check_unresolved_tag(tag: str) -> None:
    """Raise ValueError unless the tag only uses the status and token fields."""
    for _, field_name, _, _ in string.Formatter().parse(tag):
        if field_name is None:
            continue
        if field_name not in UNRESOLVED_TAG_FIELDS:
            msg = f"Unknown field {{{field_name}}} in unresolved tag {tag!r}"
            raise ValueError(msg)


def _link_for(ref: Reference, target: LinkTarget) -> str:
    href = target.page_path
    if ref.anchor:
        href = f"{href.split('#', 1)[0]}#{ref.anchor}"

    if ref.syntax_kind == CODE:
        return f"[`{ref.target_token}`]({href})"
    if ref.link_text:
        text = ref.link_text
    elif ref.display_full_name:
        text = ref.resolution_state.uid or ref.target_token
    else:
        text = target.title
    if ref.link_title:
        return f"[{text}]({href} {ref.link_title})"
    return f"[{text}]({href})"


def _plain_text_for(ref: Reference, raw: str) -> str:
    if ref.syntax_kind == CODE:
        return raw
    return ref.link_text or ref.target_token


def rewrite_references(
    body: str,
    refs: list[Reference],
    uid_targets: dict[str, LinkTarget],
    unresolved_tag: str = DEFAULT_UNRESOLVED_TAG,
) -> str:
    """Rewrite a body, replacing each reference span.

    Resolved references become links to their target page. Anything else
    degrades to plain text followed by the unresolved tag, which is formatted
    with ``status`` and ``token``.
    """
    if not refs:
        return body

    out: list[str] = []
    pos = 0
    for ref in sorted(refs, key=lambda r: r.location_offset):
        if ref.location_offset < pos:
            continue  # overlapping spans cannot come from one extraction
        raw = body[ref.location_offset : ref.end_offset]
        out.append(body[pos : ref.location_offset])

        uid = ref.resolution_state.uid
        target = uid_targets.get(uid) if uid else None
        if target is not None:
            out.append(_link_for(ref, target))
        else:
            out.append(_plain_text_for(ref, raw))
            if unresolved_tag:
                out.append(
                    unresolved_tag.format(
                        status=ref.resolution_state.status, token=ref.target_token
                    )
                )
        pos = ref.end_offset

    out.append(body[pos:])
    return "".join(out)
