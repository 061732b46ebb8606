"""Namespace derivation from storage keys."""

from __future__ import annotations

import hashlib
import re
import unicodedata

_DISALLOWED = re.compile(r"[^A-Za-z0-9._/-]+")


def to_ascii(key: str) -> str:
    """Map a storage key to an ASCII-only vector-index namespace.

    Keys made only of ``[A-Za-z0-9._/-]`` are returned unchanged. Any
    other key is transliterated, has disallowed runs replaced by ``-``,
    and gets a short digest of the original key appended so two keys
    that sanitise to the same text still get distinct namespaces.
    """
    if not key:
        raise ValueError("storage key must be non-empty")

    ascii_key = unicodedata.normalize("NFKD", key).encode("ascii", "ignore").decode("ascii")
    cleaned = _DISALLOWED.sub("-", ascii_key).strip("-")
    if cleaned == key:
        return cleaned

    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:8]
    return f"{cleaned}-{digest}" if cleaned else digest
