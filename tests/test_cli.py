"""cli.py tests using click's CliRunner."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from galeria.cli import cli
from galeria.registry import read_entries


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _run(runner: CliRunner, site: Path, *args: str, input: str | None = None):
    return runner.invoke(cli, ["--root", str(site), *args], input=input)


class TestCreateDirect:
    def test_creates_gallery(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "create", "José Pérez", "jose2024", "j1,j2.png")
        assert result.exit_code == 0, result.output
        assert "Galería creada: Galerias_privadas/cliente-jose-perez.html" in result.output
        html = (site / "Galerias_privadas" / "cliente-jose-perez.html").read_text(encoding="utf-8")
        assert 'src: "../img/j1.jpg"' in html
        assert 'src: "../img/j2.png"' in html
        assert ("JOSE2024", "Galerias_privadas/cliente-jose-perez.html") in read_entries(site / "clientes.html")
        assert (site / "Emails_personalizados" / "email-jose-perez.html").exists()

    def test_no_email(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "create", "Ana", "A1", "a.jpg", "--no-email")
        assert result.exit_code == 0
        assert not (site / "Emails_personalizados" / "email-ana.html").exists()

    def test_aggregate(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "create", "Ana", "A1", "a.jpg", "--aggregate")
        assert result.exit_code == 0
        assert 'src: "img/a.jpg"' in (site / "galeria.html").read_text(encoding="utf-8")

    def test_partial_arguments(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "create", "Ana", "A1")
        assert result.exit_code == 1
        assert "Uso: galeria create" in result.output

    def test_empty_image_list(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "create", "Ana", "A1", " , ")
        assert result.exit_code == 1
        assert "al menos un archivo" in result.output

    def test_missing_template(self, runner: CliRunner, site: Path) -> None:
        (site / "Galerias_privadas" / "cliente-valeria.html").unlink()
        result = _run(runner, site, "create", "Ana", "A1", "a.jpg")
        assert result.exit_code == 1
        assert "cliente-valeria.html" in result.output

    def test_legacy_layout(self, runner: CliRunner, site: Path) -> None:
        (site / "Galerias_privadas" / "cliente-valeria.html").rename(site / "cliente-valeria.html")
        result = _run(runner, site, "create", "Ana", "A1", "a.jpg", "--legacy-layout", "--no-email")
        assert result.exit_code == 0, result.output
        assert 'src: "img/a.jpg"' in (site / "cliente-ana.html").read_text(encoding="utf-8")
        assert ("A1", "cliente-ana.html") in read_entries(site / "clientes.html")


    def test_template_client_refused(self, runner: CliRunner, site: Path) -> None:
        template = site / "Galerias_privadas" / "cliente-valeria.html"
        before = template.read_bytes()
        result = _run(runner, site, "create", "Valeria", "V2", "v.jpg")
        assert result.exit_code == 1
        assert template.read_bytes() == before

    def test_each_result_reported_once(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "create", "Ana", "A1", "a.jpg")
        assert result.exit_code == 0
        assert result.output.count("Galería creada") == 1
        assert result.output.count("Email creado") == 1


class TestCreateInteractive:
    def test_prompts_then_declines_delete(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "create", input="Ana\nana2024\nana1, ana2\nn\n")
        assert result.exit_code == 0, result.output
        html = (site / "Galerias_privadas" / "cliente-ana.html").read_text(encoding="utf-8")
        assert 'src: "../img/ana1.jpg"' in html
        assert 'src: "../img/ana2.jpg"' in html
        assert ("ANA2024", "Galerias_privadas/cliente-ana.html") in read_entries(site / "clientes.html")

    def test_delete_sub_flow(self, runner: CliRunner, site: Path) -> None:
        assert _run(runner, site, "create", "Eva", "EVA1", "e.jpg").exit_code == 0
        result = _run(runner, site, "create", input="Ana\nA1\na.jpg\ns\nEva\n")
        assert result.exit_code == 0, result.output
        assert not (site / "Galerias_privadas" / "cliente-eva.html").exists()
        assert (site / "Galerias_privadas" / "cliente-ana.html").exists()
        assert [k for k, _ in read_entries(site / "clientes.html")] == ["VALERIA2024", "A1"]

    def test_delete_sub_flow_legacy_layout(self, runner: CliRunner, site: Path) -> None:
        (site / "Galerias_privadas" / "cliente-valeria.html").rename(site / "cliente-valeria.html")
        assert _run(runner, site, "create", "Eva", "EVA1", "e.jpg", "--legacy-layout").exit_code == 0
        assert (site / "cliente-eva.html").exists()
        result = _run(runner, site, "create", "--legacy-layout", input="Ana\nA1\na.jpg\ns\nEva\n")
        assert result.exit_code == 0, result.output
        assert "Eliminado: cliente-eva.html" in result.output
        assert not (site / "cliente-eva.html").exists()
        assert (site / "cliente-ana.html").exists()
        assert ("EVA1", "cliente-eva.html") not in read_entries(site / "clientes.html")
        assert ("A1", "cliente-ana.html") in read_entries(site / "clientes.html")

    @pytest.mark.parametrize("answers", ["\n", "Ana\n\n", "Ana\nA1\n\n"])
    def test_empty_answers_exit_1(self, runner: CliRunner, site: Path, answers: str) -> None:
        result = _run(runner, site, "create", input=answers)
        assert result.exit_code == 1
        assert not (site / "Galerias_privadas" / "cliente-ana.html").exists()


class TestDelete:
    def test_delete_with_confirmation(self, runner: CliRunner, site: Path) -> None:
        _run(runner, site, "create", "Ana", "A1", "a.jpg")
        result = _run(runner, site, "delete", "Ana", input="y\n")
        assert result.exit_code == 0, result.output
        assert "Eliminado: Galerias_privadas/cliente-ana.html" in result.output
        assert "Eliminado: Emails_personalizados/email-ana.html" in result.output
        assert [k for k, _ in read_entries(site / "clientes.html")] == ["VALERIA2024"]

    def test_abort_keeps_files(self, runner: CliRunner, site: Path) -> None:
        _run(runner, site, "create", "Ana", "A1", "a.jpg")
        result = _run(runner, site, "delete", "Ana", input="n\n")
        assert result.exit_code == 1
        assert (site / "Galerias_privadas" / "cliente-ana.html").exists()

    def test_refuses_template(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "delete", "Valeria", "--yes")
        assert result.exit_code == 1
        assert (site / "Galerias_privadas" / "cliente-valeria.html").exists()


    def test_delete_legacy_layout(self, runner: CliRunner, site: Path) -> None:
        (site / "Galerias_privadas" / "cliente-valeria.html").rename(site / "cliente-valeria.html")
        _run(runner, site, "create", "Ana", "A1", "a.jpg", "--legacy-layout")
        result = _run(runner, site, "delete", "Ana", "--yes", "--legacy-layout")
        assert result.exit_code == 0, result.output
        assert not (site / "cliente-ana.html").exists()
        assert [k for k, _ in read_entries(site / "clientes.html")] == ["VALERIA2024"]


class TestUtilities:
    def test_list(self, runner: CliRunner, site: Path) -> None:
        result = _run(runner, site, "list")
        assert result.exit_code == 0
        assert "VALERIA2024  Galerias_privadas/cliente-valeria.html" in result.output

    def test_slug(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["slug", "José Pérez"])
        assert result.output.strip() == "jose-perez"

    def test_init(self, runner: CliRunner, tmp_path: Path) -> None:
        root = tmp_path / "nuevo"
        result = runner.invoke(cli, ["--root", str(root), "init"])
        assert result.exit_code == 0, result.output
        assert (root / "clientes.html").exists()
        assert (root / "Galerias_privadas" / "cliente-valeria.html").exists()
        again = runner.invoke(cli, ["--root", str(root), "init"])
        assert "Ya existe, se conserva: clientes.html" in again.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert "0.1.0" in result.output
