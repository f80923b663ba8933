"""Name to filename/URL token conversion."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Turn a display name into a lowercase ASCII, hyphenated token.

    Accents are stripped ("José Pérez" -> "jose-perez"). Returns an empty
    string when nothing usable is left; callers must reject that.
    """
    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(c for c in decomposed if unicodedata.category(c) != "Mn")
    return _NON_ALNUM.sub("-", stripped.lower()).strip("-")
