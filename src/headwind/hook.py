"""Per-element style rewrite: inline style in, atomic classes out."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from lxml import html

from headwind.compiler import StyleCompiler, stringify_properties
from headwind.parser import StyleParser
from headwind.stylesheet import Stylesheet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Absent:
    """No style attribute."""


@dataclass(frozen=True)
class Text:
    """A style attribute holding CSS text."""
    value: str


@dataclass(frozen=True)
class Other:
    """A style attribute holding something that is not text (dict, bool, ...)."""
    value: Any


StyleValue = Union[Absent, Text, Other]

_MISSING = object()


def classify_style(value: Any = _MISSING) -> StyleValue:
    if value is _MISSING or value is None:
        return Absent()
    if isinstance(value, str):
        return Text(value)
    return Other(value)


def _rewrite(
    style: str,
    existing_class: Optional[str],
    stylesheet: Stylesheet,
    parser: Optional[StyleParser],
    compiler: Optional[StyleCompiler],
) -> Tuple[Optional[str], Optional[str]]:
    """Returns (class attribute, style attribute); None means remove/leave absent."""
    parser = parser or StyleParser()
    compiler = compiler or StyleCompiler()

    compiled = compiler.compile(parser.parse(style))

    classes = [existing_class] if existing_class else []
    classes.extend(compiled.classes)
    class_attr = " ".join(classes) if classes else None

    style_attr = stringify_properties(compiled.custom_properties) if compiled.custom_properties else None

    stylesheet.merge_rules(compiled.rules)
    return class_attr, style_attr


def rewrite_attrs(
    attrs: Mapping[str, Any],
    stylesheet: Stylesheet,
    tag: Optional[str] = None,
    parser: Optional[StyleParser] = None,
    compiler: Optional[StyleCompiler] = None,
) -> Dict[str, Any]:
    """
    Rewrite an attribute mapping, returning a new dict.

    The compiled classes are appended to `class`, `style` keeps only custom
    properties (or is dropped), and generated rules go into stylesheet.
    """
    result = dict(attrs)
    style = classify_style(attrs.get("style", _MISSING))

    if isinstance(style, Absent):
        return result

    if isinstance(style, Other):
        logger.warning(
            "Headwind: the compiler only works with strings, but style of the type '%s' on element '%s'",
            type(style.value).__name__,
            tag,
        )
        return result

    existing_class = attrs.get("class")
    if existing_class is not None and not isinstance(existing_class, str):
        logger.warning(
            "Headwind: class of the type '%s' on element '%s' is not a string, style left inline",
            type(existing_class).__name__,
            tag,
        )
        return result

    class_attr, style_attr = _rewrite(
        style.value,
        existing_class or None,
        stylesheet,
        parser,
        compiler,
    )

    if class_attr is not None:
        result["class"] = class_attr
    if style_attr is not None:
        result["style"] = style_attr
    else:
        del result["style"]
    return result


def rewrite_element(
    element: html.HtmlElement,
    stylesheet: Stylesheet,
    parser: Optional[StyleParser] = None,
    compiler: Optional[StyleCompiler] = None,
) -> html.HtmlElement:
    """Rewrite an lxml element's style/class attributes in place."""
    style = element.get("style")
    if style is None:
        return element

    class_attr, style_attr = _rewrite(style, element.get("class"), stylesheet, parser, compiler)

    if class_attr is not None:
        element.set("class", class_attr)
    if style_attr is not None:
        element.set("style", style_attr)
    else:
        del element.attrib["style"]
    return element
