"""ASGI middleware running one headwind render pass per HTML response."""
from typing import Any, List, Optional

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from headwind.config import HeadwindConfig
from headwind.render import RenderPass


class HeadwindMiddleware:
    """
    Buffers text/html responses, compiles their inline styles into atomic
    classes and injects the resulting <style> block.

    Every response gets its own RenderPass, so concurrent requests never
    share a stylesheet.
    """

    def __init__(self, app: ASGIApp, config: Optional[HeadwindConfig] = None):
        self.app = app
        self.config = config or HeadwindConfig()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope['type'] != 'http':
            await self.app(scope, receive, send)
            return

        start_message: Optional[Message] = None
        body_parts: List[bytes] = []

        async def send_wrapper(message: Message) -> None:
            nonlocal start_message

            if message['type'] == 'http.response.start':
                headers = Headers(raw=list(message.get('headers', [])))
                encoding = (headers.get('content-encoding') or 'identity').strip().lower()
                # Compressed bodies pass through untouched
                if headers.get('content-type', '').startswith('text/html') and encoding == 'identity':
                    # Hold the start message until the body has been rewritten
                    start_message = message
                    start_message['headers'] = list(message.get('headers', []))
                    return
                await send(message)
                return

            if message['type'] != 'http.response.body' or start_message is None:
                await send(message)
                return

            body_parts.append(message.get('body', b''))
            if message.get('more_body', False):
                return

            headers = MutableHeaders(raw=start_message['headers'])
            charset = _charset(headers.get('content-type', ''))
            markup = b''.join(body_parts).decode(charset)

            with RenderPass(self.config) as render_pass:
                body = render_pass.render(markup).encode(charset)

            headers['content-length'] = str(len(body))
            await send(start_message)
            await send({'type': 'http.response.body', 'body': body, 'more_body': False})

        await self.app(scope, receive, send_wrapper)

    def __getattr__(self, name: str) -> Any:
        return getattr(self.app, name)


def _charset(content_type: str) -> str:
    for part in content_type.split(';')[1:]:
        key, _, value = part.strip().partition('=')
        if key.lower() == 'charset' and value:
            return value.strip('"')
    return 'utf-8'
