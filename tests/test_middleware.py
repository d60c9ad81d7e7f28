from typing import Any, MutableMapping

from starlette.middleware.gzip import GZipMiddleware
from starlette.responses import HTMLResponse, JSONResponse, StreamingResponse
from starlette.testclient import TestClient

from headwind.compiler import compile_css
from headwind.config import HeadwindConfig
from headwind.middleware import HeadwindMiddleware
from headwind.parser import parse

PAGE = (
    "<!DOCTYPE html><html><head><title>t</title></head>"
    "<body><p style='color: red'>a</p><p style='color: red'>b</p></body></html>"
)


async def html_app(scope: MutableMapping[str, Any], receive: Any, send: Any) -> None:
    response = HTMLResponse(PAGE)
    await response(scope, receive, send)


def test_html_response_rewritten() -> None:
    client = TestClient(HeadwindMiddleware(html_app))
    response = client.get("/")

    name = compile_css(parse("color: red")).classes[0]
    assert response.status_code == 200
    assert f'<head><style id="headwind">.{name} {{ color: red }}</style><title>t</title></head>' in response.text
    assert response.text.count(f'class="{name}"') == 2
    assert "style=" not in response.text.replace('<style id="headwind">', "")
    assert response.headers["content-length"] == str(len(response.content))


def test_each_request_gets_fresh_stylesheet() -> None:
    client = TestClient(HeadwindMiddleware(html_app))
    client.get("/")
    response = client.get("/")
    assert response.text.count("{ color: red }") == 1


def test_config_style_id() -> None:
    client = TestClient(HeadwindMiddleware(html_app, config=HeadwindConfig(style_id="atomic")))
    response = client.get("/")
    assert '<style id="atomic">' in response.text


def test_streaming_html_response() -> None:
    async def app(scope: MutableMapping[str, Any], receive: Any, send: Any) -> None:
        async def chunks():
            yield "<div style='margin: 0'>"
            yield "x</div>"

        response = StreamingResponse(chunks(), media_type="text/html")
        await response(scope, receive, send)

    client = TestClient(HeadwindMiddleware(app))
    response = client.get("/")

    name = compile_css(parse("margin: 0")).classes[0]
    assert response.text == f'<style id="headwind">.{name} {{ margin: 0 }}</style><div class="{name}">x</div>'


def test_compressed_html_passthrough() -> None:
    client = TestClient(HeadwindMiddleware(GZipMiddleware(html_app, minimum_size=10)))
    response = client.get("/", headers={"accept-encoding": "gzip"})

    assert response.status_code == 200
    assert response.headers["content-encoding"] == "gzip"
    # Decoded by the client; inline styles left as the inner app sent them
    assert response.text == PAGE


def test_non_html_passthrough() -> None:
    async def app(scope: MutableMapping[str, Any], receive: Any, send: Any) -> None:
        response = JSONResponse({"style": "color: red"})
        await response(scope, receive, send)

    client = TestClient(HeadwindMiddleware(app))
    response = client.get("/")
    assert response.json() == {"style": "color: red"}


def test_html_without_styles_unchanged() -> None:
    async def app(scope: MutableMapping[str, Any], receive: Any, send: Any) -> None:
        response = HTMLResponse("<p>plain</p>")
        await response(scope, receive, send)

    client = TestClient(HeadwindMiddleware(app))
    assert client.get("/").text == "<p>plain</p>"


def test_middleware_attribute_forwarding() -> None:
    class MockApp:
        def __init__(self) -> None:
            self.foo = "bar"

        async def __call__(self, scope: MutableMapping[str, Any], receive: Any, send: Any) -> None:
            pass

    middleware = HeadwindMiddleware(MockApp())
    assert middleware.foo == "bar"
