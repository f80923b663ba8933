"""Client gallery page and email rendering.

The gallery template is a finished page for a sample client. Rendering
replaces the sample name everywhere and swaps its ``const images = [...]``
block for one built from the new client's files.
"""

import re
from collections.abc import Callable, Sequence

from galeria.document import split_regions
from galeria.errors import TemplateMalformedError

IMAGES_BLOCK_RE = re.compile(r"const images = \[[\s\S]*?\];")

DEFAULT_PLACEHOLDER = "Valeria"
SIBLING_IMAGE_PREFIX = "../img/"
ROOT_IMAGE_PREFIX = "img/"

EMAIL_NAME_TOKEN = "{{NOMBRE_CLIENTE}}"
EMAIL_URL_TOKEN = "{{URL_GALERIA}}"
EMAIL_CODE_TOKEN = "{{CODIGO_ACCESO}}"

AltTextBuilder = Callable[[str, int], str]


def session_alt_text(client_name: str, position: int) -> str:
    """Alt text for the ``position``-th (1-based) photo of a client's session."""
    return f"Retrato profesional de {client_name} – foto {position} de la sesión"


def image_entry(src: str, alt: str) -> str:
    return f'      {{src: "{src}", alt: "{alt}"}}'


def build_images_block(
    client_name: str,
    files: Sequence[str],
    image_prefix: str = SIBLING_IMAGE_PREFIX,
    alt_text: AltTextBuilder = session_alt_text,
) -> str:
    """Build the ``const images = [...]`` block for a client page."""
    lines = [
        image_entry(f"{image_prefix}{name}", alt_text(client_name, idx))
        for idx, name in enumerate(files, start=1)
    ]
    return "\n".join([
        "    // Imágenes específicas de la sesión",
        "    const images = [",
        ",\n".join(lines),
        "    ];",
    ])


def render(
    template: str,
    client_name: str,
    images: Sequence[str],
    *,
    placeholder: str = DEFAULT_PLACEHOLDER,
    image_prefix: str = SIBLING_IMAGE_PREFIX,
    alt_text: AltTextBuilder = session_alt_text,
) -> str:
    """Render a client gallery page from the sample-client template.

    Args:
        template: Template page text
        client_name: Display name that replaces ``placeholder``
        images: Image filenames in display order
        placeholder: Sample client name baked into the template
        image_prefix: Path prefix from the page to the images folder
        alt_text: Builds the alt text from (client name, 1-based position)

    Returns:
        The rendered page text

    Raises:
        TemplateMalformedError: the template has no image block
    """
    html = template.replace(placeholder, client_name)

    regions = split_regions(html, IMAGES_BLOCK_RE)
    if regions is None:
        raise TemplateMalformedError('No se encontró el bloque "const images = [...]" en la plantilla.')

    # The generated block carries its own leading indent and comment line.
    head = regions.head.rstrip(" \t")
    block = build_images_block(client_name, images, image_prefix, alt_text)
    return head + block + regions.tail


def gallery_url(base_url: str, relative_path: str) -> str:
    """Fully qualified gallery URL: base origin plus the relative page path."""
    return f"{base_url.rstrip('/')}/{relative_path.lstrip('/')}"


def render_email(template: str, *, client_name: str, gallery_url: str, access_code: str) -> str:
    """Fill the three placeholder tokens of the email template."""
    return (
        template
        .replace(EMAIL_NAME_TOKEN, client_name)
        .replace(EMAIL_URL_TOKEN, gallery_url)
        .replace(EMAIL_CODE_TOKEN, access_code)
    )
