"""Thumbnail generation for session images.

Thumbnails go to ``<images_dir>/thumb/<file>``, capped on the longest
side. The default backend shells out to an OS resize tool (``sips`` on
macOS); the ``pillow`` backend resizes in process. A failed thumbnail is
only a warning: pages always reference the original images.
"""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from PIL import Image

from galeria.config import Settings
from galeria.errors import ExternalToolFailure

logger = logging.getLogger(__name__)


def thumb_path(settings: Settings, filename: str) -> Path:
    return settings.images_path / settings.thumb_dir / filename


def build_command(template: Sequence[str], src: Path, dest: Path, max_size: int) -> list[str]:
    """Fill ``{src}``, ``{dest}`` and ``{max_size}`` in an argv template."""
    return [part.format(src=src, dest=dest, max_size=max_size) for part in template]


def _run_command(settings: Settings, src: Path, dest: Path) -> None:
    cmd = build_command(settings.thumb_command, src, dest, settings.thumb_max_size)
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ExternalToolFailure(f"No se encontró la herramienta {cmd[0]}") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"código {e.returncode}"
        raise ExternalToolFailure(f"{cmd[0]} falló con {src.name}: {detail}") from e
    except OSError as e:
        raise ExternalToolFailure(f"No se pudo ejecutar {cmd[0]}: {e}") from e


def _run_pillow(settings: Settings, src: Path, dest: Path) -> None:
    size = settings.thumb_max_size
    try:
        with Image.open(src) as im:
            im.thumbnail((size, size), Image.Resampling.LANCZOS)
            im.save(dest)
    except (OSError, ValueError) as e:
        raise ExternalToolFailure(f"No se pudo reducir {src.name}: {e}") from e


def make_thumbnail(settings: Settings, filename: str) -> Path:
    """Create one thumbnail.

    Raises:
        ExternalToolFailure: source missing or the resize failed
    """
    src = settings.images_path / filename
    if not src.exists():
        raise ExternalToolFailure(f"No se encontró la imagen {src}")

    dest = thumb_path(settings, filename)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExternalToolFailure(f"No se pudo crear {dest.parent}: {e}") from e
    if settings.thumb_backend == "pillow":
        _run_pillow(settings, src, dest)
    else:
        _run_command(settings, src, dest)
    return dest


def make_thumbnails(settings: Settings, filenames: Sequence[str]) -> list[Path]:
    """Create thumbnails for every file, logging failures as warnings.

    Returns:
        Paths of the thumbnails that were created
    """
    created = []
    for name in filenames:
        try:
            created.append(make_thumbnail(settings, name))
        except ExternalToolFailure as e:
            logger.warning(f"Miniatura omitida: {e}")
    if created:
        logger.debug(f"Miniaturas creadas: {len(created)}/{len(filenames)}")
    return created
