"""Integration tests for the mdview CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from mdview.cli.cli import app


runner = CliRunner()

DOC = "# Intro\n\n![pic](images/pic.png)\n\n## Background\n\n## Details\n\n# Conclusion\n"


@pytest.fixture(name="workdir")
def workdir_fixture(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "doc.md").write_text(DOC)
    return tmp_path


def test_toc_tree(workdir):
    result = runner.invoke(app, ["toc", "doc.md"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[1:] == [
        "  - Intro (#intro)",
        "    - Background (#background)",
        "    - Details (#details)",
        "  - Conclusion (#conclusion)",
    ]


def test_toc_json(workdir):
    result = runner.invoke(app, ["toc", "doc.md", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    toc = payload[0]["toc"]
    assert [n["id"] for n in toc] == ["intro", "conclusion"]
    assert [c["title"] for c in toc[0]["children"]] == ["Background", "Details"]


def test_toc_duplicate_flag(workdir):
    (workdir / "dup.md").write_text("# Same\n\n# Same\n")
    unique = runner.invoke(app, ["toc", "dup.md"])
    shared = runner.invoke(app, ["toc", "dup.md", "--allow-duplicate-ids"])
    assert "(#same-1)" in unique.output
    assert "(#same-1)" not in shared.output


def test_toc_no_files(workdir):
    (workdir / "empty").mkdir()
    result = runner.invoke(app, ["toc", "empty"])
    assert result.exit_code == 1
    assert "No markdown files" in result.output


def test_headings(workdir):
    result = runner.invoke(app, ["headings", "doc.md"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[0] == "1\tintro\tIntro"


def test_render_to_file(workdir):
    out = workdir / "out" / "doc.html"
    result = runner.invoke(app, ["render", "doc.md", "--out", str(out), "--virtual-host", "local.test"])
    assert result.exit_code == 0, result.output
    html = out.read_text()
    assert 'src="https://local.test/images/pic.png"' in html
    assert '<h1 id="intro">Intro</h1>' in html


def test_render_bad_policy(workdir):
    result = runner.invoke(app, ["render", "doc.md", "--escape-policy", "maybe"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_render_missing_file(workdir):
    result = runner.invoke(app, ["render", "missing.md"])
    assert result.exit_code == 1


def test_slug():
    result = runner.invoke(app, ["slug", "Getting Started & Setup!", "!!!"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["getting-started-setup", "section"]


def test_info(workdir):
    result = runner.invoke(app, ["info", "doc.md"])
    assert result.exit_code == 0, result.output
    assert "title='Intro'" in result.output
    assert "headings=4" in result.output
    assert "images=1" in result.output
