"""Logic for deriving lookup keys and short-name aliases from uids."""

import re
from urllib.parse import unquote

OPEN_BRACKETS = "([<{"
CLOSE_BRACKETS = ")]>}"
WHITESPACE_RE = re.compile(r"\s+")


def normalize_token(token: str) -> str:
    """Normalize a uid or reference token into its lookup key.

    Tokens are percent-decoded (DocFX escapes ``*`` and friends in links),
    stripped of a ``global::`` prefix and of all whitespace, so that
    ``M(int, string)`` and ``M(int,string)`` are the same key. Case is kept.
    """
    token = unquote(token.strip())
    if token.startswith("global::"):
        token = token[len("global::") :]
    return WHITESPACE_RE.sub("", token)


def split_signature(uid: str) -> tuple[str, str]:
    """Split ``N.C.M(System.String)`` into ``("N.C.M", "(System.String)")``."""
    depth = 0
    for i, ch in enumerate(uid):
        if ch == "(" and depth == 0:
            return uid[:i], uid[i:]
        if ch in OPEN_BRACKETS:
            depth += 1
        elif ch in CLOSE_BRACKETS:
            depth = max(depth - 1, 0)
    return uid, ""


def split_qualified(name: str) -> list[str]:
    """Split a dotted name on dots that are not inside brackets."""
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(name):
        if ch in OPEN_BRACKETS:
            depth += 1
        elif ch in CLOSE_BRACKETS:
            depth = max(depth - 1, 0)
        elif ch == "." and depth == 0:
            parts.append(name[start:i])
            start = i + 1
    parts.append(name[start:])
    return [p for p in parts if p]


def short_name(uid: str) -> str:
    """Return the last segment of a qualified uid, without its signature."""
    base, _sig = split_signature(uid)
    parts = split_qualified(base)
    return parts[-1] if parts else uid


def alias_keys(uid: str) -> list[str]:
    """List the aliases a generated member is reachable by, besides its uid.

    ``N.C.M`` yields ``C.M`` and ``M``. A member with a parameter list also
    yields the parameterless forms, so ``N.C.M(int)`` yields ``C.M(int)``,
    ``M(int)``, ``N.C.M``, ``C.M`` and ``M``; overloads therefore share those
    aliases and can only be reached unambiguously through the full uid.
    """
    key = normalize_token(uid)
    base, sig = split_signature(key)
    parts = split_qualified(base)

    keys: list[str] = []
    for i in range(1, len(parts)):
        keys.append(".".join(parts[i:]) + sig)
    if sig:
        for i in range(len(parts)):
            keys.append(".".join(parts[i:]))

    seen = {key}
    out = []
    for k in keys:
        if k and k not in seen:
            seen.add(k)
            out.append(k)
    return out
