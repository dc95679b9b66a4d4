import io
import json

import pytest

from md_renderer.config import RendererConfig
from md_renderer.protocol import (
    RequestProcessor,
    ResultCache,
    encode_response,
    make_cache_key,
    parse_options,
    serve,
)


def _request(operation, **data):
    return {"operation": operation, "data": data}


# ---------------------------------------------------------------------------
# RequestProcessor
# ---------------------------------------------------------------------------

@pytest.mark.integration
def test_render_markdown(processor):
    response = processor.process(_request("render_markdown", markdown="# Hi\ntext"))
    assert response["success"] is True
    assert response["result"] == {"html": "<h1>Hi</h1><p>text</p>", "length": 22, "lines": 2}
    assert isinstance(response["executionTime"], int)
    assert response["executionTime"] >= 0


@pytest.mark.integration
def test_render_length_is_utf8_bytes(processor):
    response = processor.process(_request("render_markdown", markdown="é"))
    assert response["result"]["html"] == "<p>é</p>"
    assert response["result"]["length"] == 9


@pytest.mark.integration
def test_render_line_count_uses_newlines(processor):
    response = processor.process(_request("render_markdown", markdown="a\nb\n"))
    assert response["result"]["lines"] == 3


@pytest.mark.integration
def test_heading_lines_agree_with_line_count(processor):
    markdown = "intro\u2028more\n### Title"
    rendered = processor.process(_request("render_markdown", markdown=markdown))
    extracted = processor.process(_request("extract_metadata", markdown=markdown))
    assert rendered["result"]["lines"] == 2
    assert rendered["result"]["html"] == "<p>intro\u2028more</p><h3>Title</h3>"
    assert extracted["result"]["metadata"]["headings"] == [
        {"level": 3, "text": "Title", "line": 2},
    ]


@pytest.mark.integration
def test_render_with_options(processor):
    request = _request("render_markdown", markdown="# Intro", options={"headingIds": True})
    response = processor.process(request)
    assert response["result"]["html"] == '<h1 id="intro">Intro</h1>'


@pytest.mark.integration
def test_validate_markdown_always_valid(processor):
    response = processor.process(_request("validate_markdown", markdown="**unclosed"))
    assert response["success"] is True
    assert response["result"] == {"valid": True, "errors": [], "warnings": []}


@pytest.mark.integration
def test_extract_metadata(processor):
    markdown = "# A\n\n### Title\n[l](u)\n![i](s)\n```py\nx\n```"
    response = processor.process(_request("extract_metadata", markdown=markdown))
    assert response["success"] is True
    assert response["result"]["metadata"] == {
        "headings": [
            {"level": 1, "text": "A", "line": 1},
            {"level": 3, "text": "Title", "line": 3},
        ],
        "links": [{"text": "l", "url": "u"}],
        "images": [{"alt": "i", "src": "s"}],
        "codeBlocks": [{"language": "py", "code": "x\n"}],
    }


@pytest.mark.integration
def test_render_with_toc(processor):
    response = processor.process(_request("render_with_toc", markdown="# A\n## B"))
    result = response["result"]
    assert result["html"] == "<h1>A</h1><h2>B</h2>"
    assert result["toc"].startswith('<nav class="table-of-contents">')
    assert len(result["metadata"]["headings"]) == 2


@pytest.mark.integration
def test_unknown_operation(processor):
    response = processor.process(_request("explode", markdown="x"))
    assert response["success"] is False
    assert response["error"] == "Unknown operation"
    assert "result" not in response
    assert "executionTime" in response


@pytest.mark.integration
@pytest.mark.parametrize("request_obj", [None, [], "render_markdown", {"data": {}}])
def test_malformed_request_reports_unknown_operation(processor, request_obj):
    response = processor.process(request_obj)
    assert response == {
        "success": False,
        "error": "Unknown operation",
        "executionTime": response["executionTime"],
    }


@pytest.mark.integration
@pytest.mark.parametrize("data", [None, {}, {"markdown": 42}])
def test_missing_markdown(processor, data):
    response = processor.process({"operation": "render_markdown", "data": data})
    assert response["success"] is False
    assert response["error"] == "Markdown content required"


@pytest.mark.integration
def test_empty_markdown_is_allowed(processor):
    response = processor.process(_request("render_markdown", markdown=""))
    assert response["success"] is True
    assert response["result"] == {"html": "", "length": 0, "lines": 1}


@pytest.mark.integration
def test_content_too_large():
    processor = RequestProcessor(config=RendererConfig(max_input_chars=5, cache_enabled=False))
    response = processor.process(_request("render_markdown", markdown="123456"))
    assert response["success"] is False
    assert response["error"] == "Content too large"


@pytest.mark.integration
def test_unexpected_error_is_reported(processor, monkeypatch):
    def boom(markdown, options=None):
        raise RuntimeError("renderer exploded")

    monkeypatch.setattr(processor.renderer, "render", boom)
    response = processor.process(_request("render_markdown", markdown="x"))
    assert response["success"] is False
    assert response["error"] == "renderer exploded"


@pytest.mark.integration
def test_operations(processor):
    assert processor.operations == [
        "render_markdown", "validate_markdown", "extract_metadata", "render_with_toc",
    ]


@pytest.mark.integration
def test_cache_is_used(cached_processor, monkeypatch):
    first = cached_processor.process(_request("render_markdown", markdown="**x**"))

    def fail(markdown, options=None):
        raise AssertionError("renderer should not be called on a cache hit")

    monkeypatch.setattr(cached_processor.renderer, "render", fail)
    second = cached_processor.process(_request("render_markdown", markdown="**x**"))
    assert second["result"] == first["result"]


@pytest.mark.integration
def test_cached_result_is_not_shared(cached_processor):
    first = cached_processor.process(_request("extract_metadata", markdown="# A"))
    first["result"]["metadata"]["headings"].clear()
    second = cached_processor.process(_request("extract_metadata", markdown="# A"))
    assert len(second["result"]["metadata"]["headings"]) == 1


@pytest.mark.unit
def test_parse_options():
    assert parse_options(None).sanitize is False
    assert parse_options("sanitize").sanitize is False
    options = parse_options({"sanitize": True, "headingIds": True})
    assert options.sanitize and options.heading_ids


# ---------------------------------------------------------------------------
# ResultCache
# ---------------------------------------------------------------------------

@pytest.mark.unit
def test_cache_key_depends_on_all_parts():
    base = make_cache_key("render", "x", {"a": 1})
    assert base == make_cache_key("render", "x", {"a": 1})
    assert base != make_cache_key("metadata", "x", {"a": 1})
    assert base != make_cache_key("render", "y", {"a": 1})
    assert base != make_cache_key("render", "x", {"a": 2})


@pytest.mark.unit
def test_cache_expiry(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr("md_renderer.protocol.cache.time.monotonic", lambda: now[0])
    cache = ResultCache(ttl=10.0)
    cache.set("k", {"v": 1})
    assert cache.get("k") == {"v": 1}
    now[0] += 11.0
    assert cache.get("k") is None
    assert len(cache) == 0


@pytest.mark.unit
def test_cache_eviction_and_clear():
    cache = ResultCache(ttl=60.0, max_entries=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert cache.get("a") is None
    assert cache.get("c") == 3
    cache.clear()
    assert len(cache) == 0


# ---------------------------------------------------------------------------
# serve loop
# ---------------------------------------------------------------------------

@pytest.mark.integration
def test_serve_round_trip(processor):
    requests = [
        json.dumps(_request("render_markdown", markdown="*a*")),
        "",
        "not json",
        json.dumps({"operation": "nope"}),
    ]
    stdin = io.StringIO("\n".join(requests) + "\n")
    stdout = io.StringIO()

    handled = serve(processor, stdin, stdout)

    assert handled == 2
    responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert responses[0]["success"] is True
    assert responses[0]["result"]["html"] == "<p><em>a</em></p>"
    assert responses[1]["success"] is False
    assert responses[1]["error"] == "Unknown operation"


@pytest.mark.unit
def test_encode_response_is_single_line():
    encoded = encode_response({"success": True, "result": {"html": "<p>a\nb</p>"}})
    assert "\n" not in encoded
    assert json.loads(encoded)["result"]["html"] == "<p>a\nb</p>"
