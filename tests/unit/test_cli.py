import json
import zipfile

from typer.testing import CliRunner

from scaffold_api.cli import app

runner = CliRunner()

RENDER = ["render", "--name", "Shop", "--description", "An online store with checkout"]


def test_stacks():
    result = runner.invoke(app, ["stacks"])

    assert result.exit_code == 0
    for value in ("react-node", "react-express", "next-node", "payments", "database"):
        assert value in result.output


def test_render_json():
    result = runner.invoke(app, [*RENDER, "--auth", "--crud", "--json"])

    assert result.exit_code == 0, result.output
    files = json.loads(result.output)
    paths = [f["path"] for f in files]
    assert "frontend/src/components/Login.tsx" in paths
    assert "frontend/src/components/Dashboard.tsx" in paths
    assert "backend/models/index.js" not in paths


def test_render_writes_files(tmp_path):
    result = runner.invoke(app, [*RENDER, "--database", "--output", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "backend" / "models" / "index.js").exists()
    assert (tmp_path / "README.md").read_text(encoding="utf-8").startswith("# Shop")
    assert "server.js" in result.output


def test_render_keeps_existing_files(tmp_path):
    (tmp_path / "README.md").write_text("mine", encoding="utf-8")

    result = runner.invoke(app, [*RENDER, "--output", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "README.md").read_text(encoding="utf-8") == "mine"

    result = runner.invoke(app, [*RENDER, "--output", str(tmp_path), "--force"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "README.md").read_text(encoding="utf-8") != "mine"


def test_render_zip(tmp_path):
    target = tmp_path / "shop.zip"

    result = runner.invoke(app, [*RENDER, "--stack", "next-node", "--zip", str(target)])

    assert result.exit_code == 0, result.output
    with zipfile.ZipFile(target) as archive:
        assert "shop/frontend/next.config.js" in archive.namelist()


def test_render_rejects_invalid_input():
    result = runner.invoke(app, ["render", "--name", "Shop", "--description", "short"])

    assert result.exit_code == 1
    assert "description" in result.output


def test_render_rejects_unknown_stack():
    result = runner.invoke(app, [*RENDER, "--stack", "vue-django"])

    assert result.exit_code != 0
