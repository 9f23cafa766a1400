from click.testing import CliRunner
from conftest import create_project

from simpl.cli import cli

CONFIG = """
content_sources:
  - {path: content/blog, type: blog, route: blog/}
  - {path: content, type: page, route: ""}
plugins:
  - name: SiteGlobalsPlugin
    options: {site_title: Demo}
"""


def test_render_prints_html(tmp_path):
    project = create_project(tmp_path)
    (project / "simpl.yaml").write_text(CONFIG, encoding="utf-8")
    result = CliRunner().invoke(cli, ["render", "/blog/hello", "--project", str(project)])
    assert result.exit_code == 0
    assert "<article>Hello Post|" in result.output


def test_render_missing_page_exits_nonzero(tmp_path):
    project = create_project(tmp_path)
    (project / "simpl.yaml").write_text(CONFIG, encoding="utf-8")
    result = CliRunner().invoke(cli, ["render", "/nope", "--project", str(project)])
    assert result.exit_code == 1
    assert "404 Not Found" in result.output


def test_render_reports_config_errors(tmp_path):
    (tmp_path / "simpl.yaml").write_text("plugins: [{name: Nope}]\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["render", "/", "--project", str(tmp_path)])
    assert result.exit_code != 0
    assert "Plugin Nope not found in registry" in result.output


def test_routes_lists_sources_in_order(tmp_path):
    (tmp_path / "simpl.yaml").write_text(CONFIG, encoding="utf-8")
    result = CliRunner().invoke(cli, ["routes", "--project", str(tmp_path)])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].startswith("blog/")
    assert lines[1].startswith("(any)")
    assert lines[2] == "default content type: page"


def test_plugins_and_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["plugins"])
    assert result.output.split() == [
        "TableOfContentsPlugin",
        "LastModifiedPlugin",
        "SiteGlobalsPlugin",
    ]
    assert "0.1.0" in runner.invoke(cli, ["--version"]).output
