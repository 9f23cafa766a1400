import asyncio
from pathlib import Path

import pytest
from conftest import make_config

from simpl.errors import PluginNotRegistered
from simpl.protocols import Plugin, TransformResult
from simpl.registry import PluginRegistry, default_registry
from simpl.site import SimplSite


def request(site, path):
    return asyncio.run(site.handle_request(path))


def test_renders_page_with_layout_and_partial(project):
    site = SimplSite(make_config(project))
    response = request(site, "/about")
    assert response.status == 200
    assert response.content_type == "text/html"
    assert response.content.startswith("<html><header>/about</header><main>About|")
    assert "<h2>Intro</h2>" in response.content
    assert response.size == len(response.content.encode("utf-8"))


def test_route_prefix_selects_content_type_and_template(project):
    site = SimplSite(make_config(project))
    response = request(site, "/blog/hello")
    assert response.status == 200
    assert "<article>Hello Post|<p>First <em>post</em>.</p>" in response.content


def test_root_path_renders_index(project):
    response = request(SimplSite(make_config(project)), "/")
    assert response.status == 200
    assert "<h1>Home</h1>" in response.content
    assert "<header>/index</header>" in response.content


def test_missing_content_is_404_without_template_work(project):
    site = SimplSite(make_config(project))
    (project / "content" / "about.md").unlink()
    response = request(site, "/about")
    assert response.status == 404
    assert response.content == "404 Not Found"
    assert site.template_engine.cache_stats()["cache_size"] == 0


def test_unknown_default_type_is_404(project):
    config = make_config(project, default_content_type="docs")
    config.content_sources = config.content_sources[:2]
    response = request(SimplSite(config), "/about")
    assert response.status == 404


def test_static_asset_wins_over_content(project):
    (project / "content" / "foo.css.md").write_text("# not me", encoding="utf-8")
    response = request(SimplSite(make_config(project)), "/foo.css")
    assert response.status == 200
    assert response.content == b"h1{}"
    assert response.content_type == "text/css"
    assert response.size == 4


def test_nested_asset_and_unknown_extension(project):
    (project / "assets" / "blob.zzz-unknown").write_bytes(b"\x00\x01")
    site = SimplSite(make_config(project))
    assert request(site, "/css/site.css").content == b"body{}"
    response = request(site, "/blob.zzz-unknown")
    assert response.content_type == "application/octet-stream"


def test_missing_template_is_500_without_details(project):
    response = request(SimplSite(make_config(project)), "/projects/tool")
    assert response.status == 500
    assert response.content == "500 Internal Server Error"


def test_debug_mode_includes_error_detail(project):
    response = request(SimplSite(make_config(project, debug=True)), "/projects/tool")
    assert response.status == 500
    assert "Template not found" in response.content
    assert "project.html" in response.content


def test_plugins_transform_and_extend_context(project):
    (project / "templates" / "page.html").write_text(
        "{{ site_title }}|{{ metadata.tocItemCount }}|{{ metadata.author }}|{{ content }}",
        encoding="utf-8",
    )
    config = make_config(
        project,
        plugins=[
            ("TableOfContentsPlugin", {"routes": ["/about"], "min_depth": 2, "max_depth": 4}),
            ("SiteGlobalsPlugin", {"site_title": "Simpl Site"}),
        ],
    )
    response = request(SimplSite(config), "/about")
    assert response.status == 200
    assert "Simpl Site|1|Ada|" in response.content
    assert '<li><a href="#intro">Intro</a></li>' in response.content
    assert '<h2 id="intro">Intro</h2>' in response.content


class Exploding(Plugin):
    name = "Exploding"

    async def transform(self, content, context):
        raise ValueError("kaboom")


class Tagging(Plugin):
    name = "Tagging"

    async def transform(self, content, context):
        return TransformResult(content=content + "<!--tagged-->", metadata={"title": "Tagged"})


def make_registry():
    return PluginRegistry().register("Exploding", Exploding).register("Tagging", Tagging)


def test_skip_policy_keeps_serving(project):
    config = make_config(project, plugins=[("Exploding", {}), ("Tagging", {})])
    response = request(SimplSite(config, make_registry()), "/about")
    assert response.status == 200
    assert "<main>Tagged|" in response.content
    assert "<!--tagged-->" in response.content


def test_abort_policy_fails_request(project):
    config = make_config(project, plugins=[("Exploding", {})], plugin_failure="abort")
    response = request(SimplSite(config, make_registry()), "/about")
    assert response.status == 500
    assert "kaboom" not in response.content


def test_unregistered_plugin_fails_construction(project):
    config = make_config(project, plugins=[("Missing", {})])
    with pytest.raises(PluginNotRegistered):
        SimplSite(config, default_registry())


def test_unexpected_errors_never_escape(project, monkeypatch):
    site = SimplSite(make_config(project))

    def broken(raw):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(site.markdown, "execute", broken)
    response = request(site, "/about")
    assert response.status == 500
    assert "parser exploded" not in response.content


def test_concurrent_requests_share_compiled_templates(project):
    site = SimplSite(make_config(project))

    async def main():
        return await asyncio.gather(
            *(site.handle_request(p) for p in ["/about", "/", "/about", "/blog/hello"])
        )

    responses = asyncio.run(main())
    assert [r.status for r in responses] == [200, 200, 200, 200]
    assert responses[0].content == responses[2].content
    stats = site.template_engine.cache_stats()
    assert stats["cache_size"] == 3


def test_unreadable_asset_is_500_not_content(project, monkeypatch):
    (project / "content" / "foo.css.md").write_text("# not me", encoding="utf-8")
    original = Path.read_bytes

    def read_bytes(self):
        if self.name == "foo.css":
            raise PermissionError(13, "Permission denied", str(self))
        return original(self)

    monkeypatch.setattr(Path, "read_bytes", read_bytes)
    response = request(SimplSite(make_config(project)), "/foo.css")
    assert response.status == 500
    assert response.content == "500 Internal Server Error"
