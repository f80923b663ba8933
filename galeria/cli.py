#!/usr/bin/env python3
"""Galeria CLI - client gallery pages for the photography site."""

import logging
import shutil
from pathlib import Path

import click

from galeria import __version__, registry
from galeria.client import ClientRecord, create_client, delete_client, parse_image_list
from galeria.config import load_settings
from galeria.document import Outcome
from galeria.errors import GaleriaError, MissingTemplateError, TemplateMalformedError, UsageError
from galeria.slug import slugify

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

CREATE_USAGE = """\
Uso: galeria create "Nombre Cliente" CODIGO archivo1.jpg,archivo2.jpg
Ejemplo: galeria create "Valeria" VALERIA2024 Valeria1.jpg,Valeria2.jpg
Sin argumentos se piden los datos paso a paso."""

NO_ANSWERS = ("", "n", "no")


class CommandFailed(click.ClickException):
    """Fatal error: message on stderr, exit code 1."""
    exit_code = 1


def _usage_exit(ctx: click.Context, message: str | None = None) -> None:
    if message:
        click.echo(message)
    click.echo(CREATE_USAGE)
    ctx.exit(1)


def _settings(ctx: click.Context, **overrides):
    try:
        return load_settings(ctx.obj["root"], ctx.obj["config"], **overrides)
    except UsageError as e:
        raise CommandFailed(str(e))


def _ask(text: str) -> str:
    return click.prompt(text, default="", show_default=False).strip()


@click.group()
@click.version_option(version=__version__)
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), help="Site root (default: GALERIA_ROOT or cwd)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="YAML settings file")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, root, config_path, verbose):
    """Galeria - private client galleries for the photography site.

    Create client pages, register access codes, write emails and keep
    the site-wide gallery up to date.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s - %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    ctx.obj["config"] = config_path


def _delete_flow(ctx: click.Context, legacy_layout: bool) -> None:
    """Interactive confirm-then-delete step offered after creating a client."""
    answer = _ask("\n¿Quieres eliminar algún cliente? (s/n)").lower()
    if answer in NO_ANSWERS:
        return
    name = _ask("Nombre del cliente a eliminar (tal como lo escribiste al crearlo)")
    if not name:
        click.echo("Nombre vacío. No se realizó ninguna eliminación.", err=True)
        return
    ctx.invoke(delete, name=name, yes=True, legacy_layout=legacy_layout)


@cli.command()
@click.argument("name", required=False)
@click.argument("code", required=False)
@click.argument("files", required=False)
@click.option("--email/--no-email", default=True, help="Write the personalized email")
@click.option("--thumbs/--no-thumbs", default=False, help="Generate thumbnails in img/thumb")
@click.option("--aggregate/--no-aggregate", default=False, help="Merge images into the site-wide gallery")
@click.option("--legacy-layout", is_flag=True, help="Template and page at the site root, images under img/")
@click.pass_context
def create(ctx, name, code, files, email, thumbs, aggregate, legacy_layout):
    """Create a client gallery.

    Pass NAME CODE FILES (comma-separated) for direct mode, or nothing to
    be prompted for each value.
    """
    interactive = name is None and code is None and files is None
    if not interactive and None in (name, code, files):
        _usage_exit(ctx)

    settings = _settings(ctx, legacy_layout=True if legacy_layout else None)

    if interactive:
        click.echo("=== Crear nueva galería de cliente (modo interactivo) ===\n")
        name = _ask("Nombre del cliente (ej. Valeria)")
        if not name:
            _usage_exit(ctx, "El nombre del cliente no puede estar vacío.")
        code = _ask("Código de acceso (ej. VALERIA2024)")
        if not code:
            _usage_exit(ctx, "El código de acceso no puede estar vacío.")
        files = _ask("Archivos de imagen (separados por coma, ej. Valeria1.jpg,Valeria2.jpg)")

    try:
        record = ClientRecord(name, code, tuple(parse_image_list(files, settings.default_extension)))
    except UsageError as e:
        _usage_exit(ctx, str(e))

    try:
        report = create_client(settings, record, email=email, thumbnails=thumbs, merge=aggregate)
    except (MissingTemplateError, TemplateMalformedError, UsageError) as e:
        raise CommandFailed(str(e))

    click.echo(f"Galería creada: {report.page.relative_to(settings.root).as_posix()}")
    if report.registry is Outcome.UPDATED:
        click.echo(f"Código registrado: {record.access_code}")
    elif report.registry is Outcome.ALREADY_EXISTS:
        click.echo(f"El código {record.access_code} ya existía; no se modificó {settings.registry_name}.")
    else:
        click.echo(f"[WARN] {settings.registry_name} no actualizado; añade el código manualmente.")
    if report.email:
        click.echo(f"Email creado: {report.email.relative_to(settings.root).as_posix()}")
    if thumbs:
        click.echo(f"Miniaturas: {len(report.thumbnails)}/{len(record.image_files)}")
    if report.aggregate is Outcome.UPDATED:
        click.echo(f"Imágenes añadidas a {settings.aggregate_name}")

    if interactive:
        _delete_flow(ctx, legacy_layout)


@cli.command()
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option("--legacy-layout", is_flag=True, help="Client pages live at the site root")
@click.pass_context
def delete(ctx, name, yes, legacy_layout):
    """Delete a client's page, email and registry entry."""
    settings = _settings(ctx, legacy_layout=True if legacy_layout else None)
    slug = slugify(name)
    if not yes and slug:
        click.confirm(f"¿Eliminar la galería cliente-{slug}.html y su código de acceso?", abort=True)

    try:
        report = delete_client(settings, name)
    except UsageError as e:
        raise CommandFailed(str(e))

    removed = [p.relative_to(settings.root).as_posix() for p in (report.page, report.email) if p]
    for rel in removed:
        click.echo(f"Eliminado: {rel}")
    if report.registry is Outcome.REMOVED:
        click.echo(f"Entrada eliminada de galleries en {settings.registry_name}.")
    elif not removed:
        click.echo(f"No se encontró ningún archivo ni código para {name}.")


@cli.command("list")
@click.pass_context
def list_clients(ctx):
    """List registered access codes."""
    settings = _settings(ctx)
    pairs = registry.read_entries(settings.registry_path)
    if not pairs:
        click.echo("No hay códigos registrados.")
        return
    width = max(len(code) for code, _ in pairs)
    for code, path in pairs:
        click.echo(f"{code:<{width}}  {path}")


@cli.command()
@click.argument("name")
def slug(name):
    """Print the filename token for a client name."""
    click.echo(slugify(name))


@cli.command()
@click.pass_context
def init(ctx):
    """Copy the starter templates into the site root."""
    settings = _settings(ctx)
    for src in sorted(p for p in TEMPLATES_DIR.rglob("*") if p.is_file()):
        rel = src.relative_to(TEMPLATES_DIR)
        dest = settings.root / rel
        if dest.exists():
            click.echo(f"Ya existe, se conserva: {rel.as_posix()}")
            continue
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)
        click.echo(f"Creado: {rel.as_posix()}")


def main():
    try:
        cli(obj={})
    except GaleriaError as e:
        logger.error(str(e))
        raise SystemExit(1)


if __name__ == "__main__":
    main()
