from pathlib import Path

import pytest

from simpl.config import ContentSource, PluginConfig, SiteConfig


def create_project(root: Path) -> Path:
    content = root / "content"
    (content / "blog").mkdir(parents=True)
    (content / "projects").mkdir()
    templates = root / "templates"
    (templates / "layouts").mkdir(parents=True)
    (templates / "partials").mkdir()
    (root / "assets" / "css").mkdir(parents=True)

    (content / "index.md").write_text("# Home\n\nWelcome.", encoding="utf-8")
    (content / "about.md").write_text(
        "---\ntitle: About\nauthor: Ada\n---\n## Intro\n\nHello there.",
        encoding="utf-8",
    )
    (content / "blog" / "hello.md").write_text(
        "---\ntitle: Hello Post\n---\nFirst *post*.", encoding="utf-8"
    )
    (content / "projects" / "tool.md").write_text("# Tool", encoding="utf-8")

    (templates / "page.html").write_text(
        "<main>{{ metadata.title }}|{{ content }}</main>", encoding="utf-8"
    )
    (templates / "blog.html").write_text(
        "<article>{{ metadata.title }}|{{ content }}</article>", encoding="utf-8"
    )
    (templates / "layouts" / "base.html").write_text(
        "<html>{% include 'header' %}{{ body }}</html>", encoding="utf-8"
    )
    (templates / "partials" / "header.html").write_text(
        "<header>{{ route }}</header>", encoding="utf-8"
    )
    (root / "assets" / "css" / "site.css").write_text("body{}", encoding="utf-8")
    (root / "assets" / "foo.css").write_text("h1{}", encoding="utf-8")
    return root


def make_config(root: Path, plugins=None, **overrides) -> SiteConfig:
    content = root / "content"
    values = dict(
        content_sources=[
            ContentSource(content / "blog", "blog", "blog/"),
            ContentSource(content / "projects", "project", "projects/"),
            ContentSource(content, "page", ""),
        ],
        plugins=[PluginConfig(name, options) for name, options in (plugins or [])],
        default_content_type="page",
        template_dir=root / "templates",
        assets_dir=root / "assets",
    )
    values.update(overrides)
    return SiteConfig(**values)


@pytest.fixture
def project(tmp_path):
    return create_project(tmp_path)
