"""Settings for the gallery tools.

Values are layered: built-in defaults, then ``galeria.yml`` in the site
root (or an explicit ``--config`` file), then environment variables
(a ``.env`` file in the working directory or site root is loaded first),
then command-line overrides.
"""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml
from dotenv import load_dotenv

from galeria.aggregate import DEFAULT_AGGREGATE_ALT
from galeria.errors import UsageError
from galeria.render import DEFAULT_PLACEHOLDER, ROOT_IMAGE_PREFIX, SIBLING_IMAGE_PREFIX

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "galeria.yml"

ENV_VARS = {
    "GALERIA_ROOT": "root",
    "GALERIA_BASE_URL": "base_url",
    "GALERIA_THUMB_BACKEND": "thumb_backend",
}

THUMB_BACKENDS = ("command", "pillow")

# macOS sips: -Z caps the longest side.
DEFAULT_THUMB_COMMAND = ["sips", "-Z", "{max_size}", "{src}", "--out", "{dest}"]


@dataclass(frozen=True)
class Settings:
    """Where the site lives and how pages are generated."""

    root: Path = field(default_factory=Path.cwd)
    base_url: str = "https://ante.photo"
    gallery_dir: str = "Galerias_privadas"
    emails_dir: str = "Emails_personalizados"
    images_dir: str = "img"
    template_name: str = "cliente-valeria.html"
    email_template_name: str = "email-galeria-cliente.html"
    registry_name: str = "clientes.html"
    aggregate_name: str = "galeria.html"
    placeholder: str = DEFAULT_PLACEHOLDER
    default_extension: str = ".jpg"
    thumb_dir: str = "thumb"
    thumb_max_size: int = 1200
    thumb_backend: str = "command"
    thumb_command: tuple[str, ...] = tuple(DEFAULT_THUMB_COMMAND)
    aggregate_alt: str = DEFAULT_AGGREGATE_ALT
    legacy_layout: bool = False

    # Pages live in gallery_dir next to img/, unless the legacy layout
    # writes them at the site root.
    @property
    def page_dir(self) -> Path:
        return self.root if self.legacy_layout else self.root / self.gallery_dir

    @property
    def image_prefix(self) -> str:
        return ROOT_IMAGE_PREFIX if self.legacy_layout else SIBLING_IMAGE_PREFIX

    @property
    def template_path(self) -> Path:
        return self.page_dir / self.template_name

    @property
    def email_template_path(self) -> Path:
        return self.root / self.emails_dir / self.email_template_name

    @property
    def registry_path(self) -> Path:
        return self.root / self.registry_name

    @property
    def aggregate_path(self) -> Path:
        return self.root / self.aggregate_name

    @property
    def images_path(self) -> Path:
        return self.root / self.images_dir

    def page_relpath(self, slug: str) -> str:
        """Registry value for a client page, relative to the site root."""
        filename = f"cliente-{slug}.html"
        return filename if self.legacy_layout else f"{self.gallery_dir}/{filename}"

    def email_path(self, slug: str) -> Path:
        return self.root / self.emails_dir / f"email-{slug}.html"


def _coerce(name: str, value):
    if name == "root":
        return Path(value).expanduser()
    if name == "thumb_command":
        if isinstance(value, str):
            value = value.split()
        return tuple(str(v) for v in value)
    if name == "thumb_max_size":
        try:
            return int(value)
        except (TypeError, ValueError):
            raise UsageError(f"thumb_max_size debe ser un entero, no {value!r}")
    if name == "legacy_layout" and isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "si", "sí")
    return value


def _from_mapping(settings: Settings, data: dict, source: str) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise UsageError(f"Opciones desconocidas en {source}: {', '.join(unknown)}")
    return replace(settings, **{k: _coerce(k, v) for k, v in data.items()})


def load_yaml(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise UsageError(f"{path} debe contener un mapa de opciones")
    return data


def load_settings(
    root: Path | None = None,
    config_path: Path | None = None,
    **overrides,
) -> Settings:
    """Build Settings from defaults, YAML, environment and overrides.

    Args:
        root: Site root (overrides GALERIA_ROOT and the YAML ``root``)
        config_path: Explicit YAML file; defaults to ``<root>/galeria.yml``
        **overrides: Settings fields given on the command line; None values
            are ignored

    Raises:
        UsageError: unknown keys or invalid values
    """
    for env_file in (Path.cwd() / ".env", (root or Path.cwd()) / ".env"):
        if env_file.exists():
            load_dotenv(env_file)

    settings = Settings()

    env = {attr: os.environ[var] for var, attr in ENV_VARS.items() if os.environ.get(var)}
    if root is not None:
        env.pop("root", None)
        settings = replace(settings, root=Path(root))
    elif "root" in env:
        settings = _from_mapping(settings, {"root": env.pop("root")}, "GALERIA_ROOT")

    if config_path is None:
        candidate = settings.root / CONFIG_FILENAME
        config_path = candidate if candidate.exists() else None
    elif not Path(config_path).exists():
        raise UsageError(f"No se encontró el archivo de configuración {config_path}")

    if config_path is not None:
        logger.debug(f"Cargando configuración de {config_path}")
        data = load_yaml(Path(config_path))
        if root is not None:
            data.pop("root", None)
        settings = _from_mapping(settings, data, str(config_path))

    settings = _from_mapping(settings, env, "el entorno")
    settings = _from_mapping(settings, {k: v for k, v in overrides.items() if v is not None}, "la línea de órdenes")

    if settings.thumb_backend not in THUMB_BACKENDS:
        raise UsageError(
            f"thumb_backend debe ser uno de {', '.join(THUMB_BACKENDS)}, no {settings.thumb_backend!r}"
        )
    return settings
