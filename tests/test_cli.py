import json

import pytest
from typer.testing import CliRunner

from md_renderer import __version__
from md_renderer.cli.app import app

runner = CliRunner()


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text(
        "# Title\n\nSome **bold** text.\n\n## Usage\n\n```sh\nmake\n```\n[docs](https://example.com)\n",
        encoding="utf-8",
    )
    return path


@pytest.mark.cli
def test_render_to_stdout(sample):
    result = runner.invoke(app, ["render", str(sample)])
    assert result.exit_code == 0
    assert "<h1>Title</h1>" in result.stdout
    assert "<strong>bold</strong>" in result.stdout


@pytest.mark.cli
def test_render_to_file_with_toc(sample, tmp_path):
    out = tmp_path / "doc.html"
    result = runner.invoke(app, ["render", str(sample), "-o", str(out), "--toc", "--heading-ids"])
    assert result.exit_code == 0
    html = out.read_text(encoding="utf-8")
    assert html.startswith('<nav class="table-of-contents">')
    assert '<h2 id="usage">Usage</h2>' in html


@pytest.mark.cli
def test_render_from_stdin():
    result = runner.invoke(app, ["render", "-"], input="*hi*")
    assert result.exit_code == 0
    assert "<p><em>hi</em></p>" in result.stdout


@pytest.mark.cli
def test_render_missing_file(tmp_path):
    result = runner.invoke(app, ["render", str(tmp_path / "missing.md")])
    assert result.exit_code == 1


@pytest.mark.cli
def test_extract_json(sample):
    result = runner.invoke(app, ["extract", str(sample), "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["summary"] == {"headings": 2, "links": 1, "images": 0, "codeBlocks": 1}
    assert data["metadata"]["headings"][1] == {"level": 2, "text": "Usage", "line": 5}


@pytest.mark.cli
def test_extract_rich(sample):
    result = runner.invoke(app, ["extract", str(sample)])
    assert result.exit_code == 0
    assert "Usage" in result.stdout
    assert "https://example.com" in result.stdout


@pytest.mark.cli
def test_extract_unknown_format(sample):
    result = runner.invoke(app, ["extract", str(sample), "--format", "xml"])
    assert result.exit_code == 1


@pytest.mark.cli
def test_serve():
    request = json.dumps({"operation": "render_markdown", "data": {"markdown": "# A"}})
    result = runner.invoke(app, ["serve"], input=request + "\n")
    assert result.exit_code == 0
    response = json.loads(result.stdout.strip())
    assert response["success"] is True
    assert response["result"]["html"] == "<h1>A</h1>"


@pytest.mark.cli
def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
