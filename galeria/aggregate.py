"""Site-wide gallery that collects every client's images.

The aggregate page holds one ``const images = [...]`` array. Merging only
appends entries whose ``src`` is not already listed; the filename is the
dedup key, not the file content.
"""

import logging
import re
from collections.abc import Sequence
from pathlib import Path

from galeria.document import Outcome, read_text, split_regions, write_text
from galeria.render import IMAGES_BLOCK_RE, ROOT_IMAGE_PREFIX, image_entry

logger = logging.getLogger(__name__)

SRC_RE = re.compile(r'src:\s*"([^"]+)"')

DEFAULT_AGGREGATE_ALT = "Retrato profesional de estudio"
OPEN_MARKER = "const images = ["
CLOSE_MARKER = "];"


def existing_sources(block: str) -> set[str]:
    return set(SRC_RE.findall(block))


def new_entries(
    block: str,
    filenames: Sequence[str],
    image_prefix: str = ROOT_IMAGE_PREFIX,
    alt: str = DEFAULT_AGGREGATE_ALT,
) -> list[str]:
    """Entry lines for the files not yet present, in input order."""
    seen = existing_sources(block)
    lines = []
    for name in filenames:
        src = f"{image_prefix}{name}"
        if src in seen:
            continue
        seen.add(src)
        lines.append(image_entry(src, alt))
    return lines


def append_entries(block: str, lines: Sequence[str]) -> str:
    """Insert entry lines before the closing ``];`` of an images block."""
    inner = block[len(OPEN_MARKER):-len(CLOSE_MARKER)]
    body = inner.rstrip()
    closing = inner[len(body):]
    if "\n" not in closing:
        closing = "\n    "

    last = body.rfind("}")
    if last != -1 and not body[last + 1:].lstrip().startswith(","):
        body = body[: last + 1] + "," + body[last + 1:]

    return OPEN_MARKER + body + "\n" + ",\n".join(lines) + closing + CLOSE_MARKER


def merge_images(
    doc: Path,
    filenames: Sequence[str],
    client_name: str,
    *,
    image_prefix: str = ROOT_IMAGE_PREFIX,
    alt: str = DEFAULT_AGGREGATE_ALT,
) -> Outcome:
    """Add a client's images to the aggregate gallery document.

    Returns:
        Outcome.UPDATED, Outcome.NO_CHANGE (every file already listed) or
        Outcome.NOT_FOUND (document or block missing)
    """
    if not doc.exists():
        logger.warning(f"No se encontró {doc.name}, omitiendo la galería general.")
        return Outcome.NOT_FOUND

    regions = split_regions(read_text(doc), IMAGES_BLOCK_RE)
    if regions is None:
        logger.warning(f'No se encontró el bloque "const images = [...]" en {doc.name}; revisa el archivo manualmente.')
        return Outcome.NOT_FOUND

    lines = new_entries(regions.block, filenames, image_prefix, alt)
    if not lines:
        logger.info(f"Las imágenes de {client_name} ya estaban en {doc.name}.")
        return Outcome.NO_CHANGE

    write_text(doc, regions.replace_block(append_entries(regions.block, lines)))
    logger.debug(f"Se añadieron {len(lines)} imagen(es) de {client_name} a {doc.name}.")
    return Outcome.UPDATED
