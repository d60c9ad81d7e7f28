"""Render pass: one stylesheet per page render, flushed into the response once."""
import contextvars
import re
from typing import Optional

from lxml import html

from headwind.config import HeadwindConfig
from headwind.hook import rewrite_element
from headwind.stylesheet import Stylesheet, escape_style_text

# Render pass active in the current request/task, for code that cannot receive it directly
current_render_pass: contextvars.ContextVar[Optional["RenderPass"]] = contextvars.ContextVar(
    "current_render_pass", default=None
)

_STYLE_ATTR_RE = re.compile(r"\sstyle\s*=", re.IGNORECASE)
_FRAGMENT_PARENT = "div"


class RenderPass:
    """
    Owns the stylesheet for a single render.

    Elements are rewritten into it while the page renders; flush() serializes
    and clears it, so nothing leaks into the next render.
    """

    def __init__(self, config: Optional[HeadwindConfig] = None):
        self.config = config or HeadwindConfig()
        self.stylesheet = Stylesheet()
        self.parser = self.config.make_parser()
        self.compiler = self.config.make_compiler()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "RenderPass":
        self._token = current_render_pass.set(self)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._token is not None:
            current_render_pass.reset(self._token)
            self._token = None
        self.stylesheet.clear()

    def process_element(self, element: html.HtmlElement) -> html.HtmlElement:
        return rewrite_element(element, self.stylesheet, parser=self.parser, compiler=self.compiler)

    def process_tree(self, root: html.HtmlElement) -> html.HtmlElement:
        """Rewrite every element under root (inclusive) that has a style attribute."""
        elements = [
            el for el in root.iter()
            if isinstance(el.tag, str) and el.get("style") is not None
        ]
        for element in elements:
            self.process_element(element)
        return root

    def process_html(self, markup: str) -> str:
        """Rewrite all inline styles in an HTML document or fragment."""
        if not _STYLE_ATTR_RE.search(markup):
            return markup

        if _is_document(markup):
            root = html.document_fromstring(markup)
            self.process_tree(root)
            return _serialize_document(root, markup)

        container = html.fragment_fromstring(markup, create_parent=_FRAGMENT_PARENT)
        self.process_tree(container)
        rendered = html.tostring(container, encoding="unicode")
        # Strip the wrapper added by create_parent
        return rendered[len(f"<{_FRAGMENT_PARENT}>"):-len(f"</{_FRAGMENT_PARENT}>")]

    def flush(self) -> str:
        """Serialized CSS for this pass. Clears the stylesheet."""
        return self.stylesheet.drain()

    def flush_style_block(self) -> str:
        block = self.stylesheet.render(self.config.style_id)
        self.stylesheet.clear()
        return block

    def inject_tree(self, root: html.HtmlElement) -> html.HtmlElement:
        """Flush the stylesheet into a document tree as the first child of <head>."""
        css = self.flush()
        if not css:
            return root

        head = root.find("head")
        if head is None:
            head = root.makeelement("head", {})
            root.insert(0, head)

        style = root.makeelement("style", {"id": self.config.style_id})
        style.text = escape_style_text(css)
        head.insert(0, style)
        return root

    def inject(self, markup: str) -> str:
        """Flush the stylesheet into markup: into <head> for documents, prepended for fragments."""
        if not len(self.stylesheet):
            return markup

        if _is_document(markup):
            root = html.document_fromstring(markup)
            self.inject_tree(root)
            return _serialize_document(root, markup)

        styles = self.flush_style_block()
        if "</head>" in markup:
            return markup.replace("</head>", f"{styles}</head>", 1)
        # Fallback: prepend
        return f"{styles}{markup}"

    def render(self, markup: str) -> str:
        if not _is_document(markup):
            return self.inject(self.process_html(markup))

        # One lxml round trip for both the rewrite and the injection
        root = html.document_fromstring(markup)
        self.process_tree(root)
        if not len(self.stylesheet):
            return markup
        self.inject_tree(root)
        return _serialize_document(root, markup)


def _is_document(markup: str) -> bool:
    clean_html = markup.strip().lower()
    return clean_html.startswith('<!doctype') or clean_html.startswith('<html')


def _serialize_document(root: html.HtmlElement, markup: str) -> str:
    # lxml reports a default doctype even when the source has none
    doctype = None
    if markup.lstrip().lower().startswith('<!doctype'):
        doctype = root.getroottree().docinfo.doctype
    return html.tostring(root, encoding="unicode", doctype=doctype)
