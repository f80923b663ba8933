"""Text documents with one addressable block.

Host documents (registry, aggregate gallery, templates) are treated as
opaque text. A document is split into three regions around the first match
of a block pattern: the text before it, the block itself and the text after.
"""

import os
import re
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Outcome(Enum):
    """Result of a host document edit."""

    UPDATED = "updated"
    REMOVED = "removed"
    ALREADY_EXISTS = "already_exists"
    NO_CHANGE = "no_change"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Regions:
    """A document split around a single delimited block."""

    head: str
    block: str
    tail: str

    def replace_block(self, block: str) -> str:
        return self.head + block + self.tail

    def join(self) -> str:
        return self.head + self.block + self.tail


def split_regions(text: str, pattern: re.Pattern) -> Regions | None:
    """Split ``text`` around the first match of ``pattern``.

    Returns None when the block is not present.
    """
    m = pattern.search(text)
    if not m:
        return None
    return Regions(head=text[: m.start()], block=m.group(0), tail=text[m.end():])


def read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    """Write ``content`` atomically: temp file in the same folder, then rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
