import asyncio

from simpl.markdown import MarkdownProcessor, parse_frontmatter, render_markdown


def test_frontmatter_parsed_into_strings():
    metadata, body = parse_frontmatter("---\ntitle: X\n---\nbody")
    assert metadata == {"title": "X"}
    assert body == "body"


def test_no_frontmatter_returns_text_unchanged():
    text = "  # Title\n\nSome text\n"
    metadata, body = parse_frontmatter(text)
    assert metadata == {}
    assert body == text


def test_frontmatter_first_colon_splits_and_ignores_bare_lines():
    text = "---\nurl: https://example.com/a\njust words\n count :  3 \n---\n\n  Body  \n"
    metadata, body = parse_frontmatter(text)
    assert metadata == {"url": "https://example.com/a", "count": "3"}
    assert body == "Body"


def test_unterminated_frontmatter_is_body():
    text = "---\ntitle: X\nno closing line"
    assert parse_frontmatter(text) == ({}, text)


def test_empty_frontmatter_block():
    metadata, body = parse_frontmatter("---\n---\ntext")
    assert metadata == {}
    assert body == "text"


def test_body_may_contain_horizontal_rules():
    metadata, body = parse_frontmatter("---\na: 1\n---\nabove\n\n---\n\nbelow")
    assert metadata == {"a": "1"}
    assert body == "above\n\n---\n\nbelow"


def test_render_markdown_commonmark_basics():
    html = render_markdown(
        "## Intro\n\n*em* and [link](/x)\n\n- one\n- two\n\n```\ncode <b>\n```\n\n<div class=\"raw\">kept</div>\n"
    )
    assert "<h2>Intro</h2>" in html
    assert "<em>em</em>" in html
    assert '<a href="/x">link</a>' in html
    assert "<li>one</li>" in html
    assert "code &lt;b&gt;" in html
    assert '<div class="raw">kept</div>' in html


def test_processor_execute():
    result = MarkdownProcessor().execute("---\ntitle: Hi\n---\n# Heading")
    assert result.metadata == {"title": "Hi"}
    assert result.content.strip() == "<h1>Heading</h1>"


def test_processor_is_safe_to_call_concurrently():
    processor = MarkdownProcessor()

    async def run(i):
        await asyncio.sleep(0)
        return processor.execute(f"---\nn: {i}\n---\n# Page {i}")

    async def main():
        return await asyncio.gather(*(run(i) for i in range(20)))

    results = asyncio.run(main())
    for i, result in enumerate(results):
        assert result.metadata == {"n": str(i)}
        assert f"Page {i}" in result.content
