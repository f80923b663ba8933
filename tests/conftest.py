"""Shared fixtures: a throwaway site root built from the starter templates."""

import shutil
from pathlib import Path

import pytest

from galeria.cli import TEMPLATES_DIR
from galeria.config import ENV_VARS, load_settings

EMPTY_REGISTRY = (
    "<script>\n"
    "    const galleries = {\n"
    '      // Agrega más: "CODIGO": "archivo.html"\n'
    "    };\n"
    "</script>\n"
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    shutil.copytree(TEMPLATES_DIR, root)
    (root / "img").mkdir()
    return root


@pytest.fixture
def settings(site: Path):
    return load_settings(site)
