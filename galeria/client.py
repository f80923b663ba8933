"""Create and delete client galleries.

Creating a client writes ``cliente-<slug>.html`` from the sample template,
registers the access code in the registry document and, optionally,
writes a personalized email, generates thumbnails and merges the images
into the site-wide gallery. Only a missing or broken template stops the
run; every later step is skipped with a warning when its document is
missing.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from galeria import aggregate, registry
from galeria.config import Settings
from galeria.document import Outcome, read_text, write_text
from galeria.errors import MissingTemplateError, UsageError
from galeria.render import gallery_url, render, render_email
from galeria.slug import slugify
from galeria.thumbs import make_thumbnails

logger = logging.getLogger(__name__)


def parse_image_list(raw: str, default_extension: str = ".jpg") -> list[str]:
    """Split a comma-separated file list.

    Blank items are dropped; names without a dot get ``default_extension``.
    """
    names = [part.strip() for part in raw.split(",")]
    return [name if "." in name else f"{name}{default_extension}" for name in names if name]


@dataclass(frozen=True)
class ClientRecord:
    """One client gallery request."""

    name: str
    access_code: str
    image_files: tuple[str, ...]

    def __post_init__(self):
        name = self.name.strip()
        code = self.access_code.strip().upper()
        if not name:
            raise UsageError("El nombre del cliente no puede estar vacío.")
        if not code:
            raise UsageError("El código de acceso no puede estar vacío.")
        if not self.image_files:
            raise UsageError("Debes indicar al menos un archivo de imagen.")
        if not slugify(name):
            raise UsageError(f"No se puede generar un nombre de archivo a partir de {name!r}.")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "access_code", code)
        object.__setattr__(self, "image_files", tuple(self.image_files))

    @property
    def slug(self) -> str:
        return slugify(self.name)


@dataclass
class CreateReport:
    """What a create run produced."""

    page: Path
    registry: Outcome
    email: Path | None = None
    thumbnails: list[Path] = field(default_factory=list)
    aggregate: Outcome | None = None


@dataclass
class DeleteReport:
    """What a delete run removed."""

    page: Path | None
    email: Path | None
    registry: Outcome


def write_gallery_page(settings: Settings, record: ClientRecord) -> Path:
    """Render and write the client's gallery page.

    Raises:
        MissingTemplateError: the sample template does not exist
        TemplateMalformedError: the template has no image block
        UsageError: the page would overwrite the template
    """
    template_path = settings.template_path
    if not template_path.exists():
        raise MissingTemplateError(
            f"No se encontró la plantilla {settings.template_name} en {template_path.parent}."
        )
    out_path = settings.root / settings.page_relpath(record.slug)
    if out_path == template_path:
        raise UsageError(f"{record.name} es el cliente de la plantilla; usa otro nombre.")

    html = render(
        read_text(template_path),
        record.name,
        record.image_files,
        placeholder=settings.placeholder,
        image_prefix=settings.image_prefix,
    )
    write_text(out_path, html)
    logger.debug(f"Galería creada: {out_path.name}")
    return out_path


def write_email(settings: Settings, record: ClientRecord) -> Path | None:
    """Write the personalized email, or skip with a warning if no template."""
    template_path = settings.email_template_path
    if not template_path.exists():
        logger.warning(f"No se encontró {settings.email_template_name}, se omitió la creación del email.")
        return None

    html = render_email(
        read_text(template_path),
        client_name=record.name,
        gallery_url=gallery_url(settings.base_url, settings.page_relpath(record.slug)),
        access_code=record.access_code,
    )
    out_path = settings.email_path(record.slug)
    write_text(out_path, html)
    logger.debug(f"Email creado: {out_path.name}")
    return out_path


def create_client(
    settings: Settings,
    record: ClientRecord,
    *,
    email: bool = True,
    thumbnails: bool = False,
    merge: bool = False,
) -> CreateReport:
    """Run the full create workflow for one client."""
    page = write_gallery_page(settings, record)
    report = CreateReport(
        page=page,
        registry=registry.add_entry(settings.registry_path, record.access_code, settings.page_relpath(record.slug)),
    )

    if email:
        report.email = write_email(settings, record)
    if thumbnails:
        report.thumbnails = make_thumbnails(settings, record.image_files)
    if merge:
        report.aggregate = aggregate.merge_images(
            settings.aggregate_path,
            record.image_files,
            record.name,
            image_prefix=f"{settings.images_dir}/",
            alt=settings.aggregate_alt,
        )
    return report


def _unlink(root: Path, path: Path) -> Path | None:
    rel = path.relative_to(root).as_posix()
    if not path.exists():
        logger.debug(f"No se encontró: {rel}")
        return None
    path.unlink()
    logger.debug(f"Eliminado: {rel}")
    return path


def delete_client(settings: Settings, name: str) -> DeleteReport:
    """Remove a client's page, email and registry entries.

    The client is identified by display name, as typed when it was
    created; everything is derived from its slug.
    """
    slug = slugify(name.strip())
    if not slug:
        raise UsageError("Nombre vacío. No se realizó ninguna eliminación.")

    relpath = settings.page_relpath(slug)
    if settings.root / relpath == settings.template_path:
        raise UsageError(f"{settings.template_name} es la plantilla; no se puede eliminar.")
    return DeleteReport(
        page=_unlink(settings.root, settings.root / relpath),
        email=_unlink(settings.root, settings.email_path(slug)),
        registry=registry.remove_entry(settings.registry_path, relpath),
    )
