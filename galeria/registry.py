"""Access code registry stored inside ``clientes.html``.

The registry is a JavaScript object literal embedded in the page::

    const galleries = {
          "VALERIA2024": "Galerias_privadas/cliente-valeria.html",
          "ANA2024": "Galerias_privadas/cliente-ana.html"
          // Agrega más: "CODIGO": "archivo.html"
        };

The browser-side script reads it verbatim, and every edit here re-parses
it, so the serialized shape must stay exactly this one: double-quoted key
and value, one pair per line, commas between pairs, trailing comment line.

Edits work on an ordered list of (key, value) pairs. The pure helpers
(parse_pairs, with_entry, without_value, serialize_block) never touch the
filesystem; add_entry/remove_entry do the read -> edit -> write cycle.
"""

import logging
import re
from pathlib import Path

from galeria.document import Outcome, Regions, read_text, split_regions, write_text
from galeria.errors import (
    DuplicateKeyError,
    MalformedHostDocumentError,
    MissingHostDocumentError,
)

logger = logging.getLogger(__name__)

GALLERIES_BLOCK_RE = re.compile(r"const galleries = \{([\s\S]*?)\};")
PAIR_RE = re.compile(r'"([^"]+)"\s*:\s*"([^"]+)"')
COMMENT_RE = re.compile(r"^\s*(//.*?)\s*$", re.MULTILINE)

DEFAULT_COMMENT = '// Agrega más: "CODIGO": "archivo.html"'
PAIR_INDENT = "      "
CLOSE_INDENT = "    "

Pairs = list[tuple[str, str]]


def parse_pairs(body: str) -> Pairs:
    """All ``"key": "value"`` pairs of a block body, in document order.

    Comment lines are skipped; the default comment itself contains an
    example pair.
    """
    code = COMMENT_RE.sub("", body)
    return [(m.group(1), m.group(2)) for m in PAIR_RE.finditer(code)]


def trailing_comment(body: str) -> str:
    """Last ``//`` comment line in the block body, or the default one."""
    comments = COMMENT_RE.findall(body)
    return comments[-1] if comments else DEFAULT_COMMENT


def serialize_block(pairs: Pairs, comment: str = DEFAULT_COMMENT) -> str:
    """Render the full ``const galleries = {...};`` block."""
    lines = [f'{PAIR_INDENT}"{k}": "{v}"' for k, v in pairs]
    parts = [",\n".join(lines)] if lines else []
    parts.append(f"{PAIR_INDENT}{comment}")
    return "const galleries = {\n" + "\n".join(parts) + f"\n{CLOSE_INDENT}}};"


def with_entry(pairs: Pairs, key: str, value: str) -> Pairs:
    """Return ``pairs`` plus ``(key, value)`` at the end.

    Raises:
        DuplicateKeyError: ``key`` is already present
    """
    if any(k == key for k, _ in pairs):
        raise DuplicateKeyError(key)
    return pairs + [(key, value)]


def without_value(pairs: Pairs, value: str) -> Pairs:
    """Return ``pairs`` minus every pair whose value is exactly ``value``."""
    return [(k, v) for k, v in pairs if v != value]


def _load(doc: Path) -> tuple[Regions, Pairs, str]:
    """Read the registry document and parse its block."""
    if not doc.exists():
        raise MissingHostDocumentError(f"No se encontró {doc.name}")
    regions = split_regions(read_text(doc), GALLERIES_BLOCK_RE)
    if regions is None:
        raise MalformedHostDocumentError(f'No se encontró el objeto "galleries" en {doc.name}')
    body = GALLERIES_BLOCK_RE.match(regions.block).group(1)
    return regions, parse_pairs(body), trailing_comment(body)


def _commit(doc: Path, regions: Regions, pairs: Pairs, comment: str) -> None:
    """Serialize, check the block parses back to ``pairs`` and write."""
    block = serialize_block(pairs, comment)
    m = GALLERIES_BLOCK_RE.fullmatch(block)
    if not m or parse_pairs(m.group(1)) != pairs:
        raise MalformedHostDocumentError(
            f"El mapa de galerías de {doc.name} no se puede serializar sin pérdidas; no se modificó."
        )
    write_text(doc, regions.replace_block(block))


def has_key(doc: Path, key: str) -> bool:
    """Quick duplicate guard: is ``"key"`` anywhere in the document text?"""
    if not doc.exists():
        return False
    return f'"{key}"' in read_text(doc)


def read_entries(doc: Path) -> Pairs:
    """Registered (code, path) pairs. Missing document or block gives []."""
    try:
        _, pairs, _ = _load(doc)
    except (MissingHostDocumentError, MalformedHostDocumentError) as e:
        logger.warning(str(e))
        return []
    return pairs


def add_entry(doc: Path, key: str, value: str) -> Outcome:
    """Register ``key -> value`` in the registry document.

    Returns:
        Outcome.UPDATED, Outcome.ALREADY_EXISTS (no write) or
        Outcome.NOT_FOUND (document or block missing, no write)
    """
    if has_key(doc, key):
        logger.info(f"El código {key} ya existe en {doc.name}; no se modificó el mapa de galerías.")
        return Outcome.ALREADY_EXISTS

    try:
        regions, pairs, comment = _load(doc)
        _commit(doc, regions, with_entry(pairs, key, value), comment)
    except MissingHostDocumentError as e:
        logger.warning(f"{e}, omitiendo actualización del mapa de códigos.")
        return Outcome.NOT_FOUND
    except MalformedHostDocumentError as e:
        logger.warning(f"{e}; añade el código manualmente.")
        return Outcome.NOT_FOUND
    except DuplicateKeyError:
        logger.info(f"El código {key} ya existe en {doc.name}; no se modificó el mapa de galerías.")
        return Outcome.ALREADY_EXISTS

    logger.debug(f"Se añadió el código {key} en {doc.name}.")
    return Outcome.UPDATED


def remove_entry(doc: Path, value: str) -> Outcome:
    """Drop every registry pair pointing at ``value``.

    Matching is by gallery path, not by code: two codes sharing the same
    path are both removed.

    Returns:
        Outcome.REMOVED or Outcome.NOT_FOUND
    """
    try:
        regions, pairs, comment = _load(doc)
        remaining = without_value(pairs, value)
        if len(remaining) == len(pairs):
            logger.info("No se encontró ninguna entrada en galleries para ese cliente.")
            return Outcome.NOT_FOUND
        _commit(doc, regions, remaining, comment)
    except MissingHostDocumentError as e:
        logger.warning(f"{e}; no se pudo actualizar el mapa de códigos.")
        return Outcome.NOT_FOUND
    except MalformedHostDocumentError as e:
        logger.warning(f"{e}; revisa el archivo manualmente.")
        return Outcome.NOT_FOUND

    for k, v in pairs:
        if v == value:
            logger.info(f"Entrada {k} eliminada de galleries en {doc.name}.")
    return Outcome.REMOVED
