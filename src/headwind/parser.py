"""Parser for the inline style subset: declarations plus one level of nested rules."""
import logging
from typing import List, Tuple

from headwind.ast_nodes import Declaration, NestedRule, ParsedNode
from headwind.exceptions import HeadwindSyntaxError

logger = logging.getLogger(__name__)

# Only `selector { ... }` directly inside the style string is supported
MAX_NESTING_DEPTH = 1


class StyleParser:
    """
    Scans an inline style string left to right with a cursor.

    `;` ends a declaration, `{` opens a nested rule and `}` closes it.
    Open rules live on an explicit stack, so a second `{` before the
    matching `}` is reported instead of being mis-parsed.
    """

    def __init__(self, strict: bool = False):
        # strict: malformed declarations raise instead of warning
        self.strict = strict

    def parse(self, text: str) -> List[ParsedNode]:
        result: List[ParsedNode] = []
        if not text.strip():
            return result

        # (selector, declarations) of each open nested rule
        stack: List[Tuple[str, List[Declaration]]] = []
        current: List[Declaration] = result  # type: ignore[assignment]
        segment_start = 0

        for position, char in enumerate(text):
            if char == ';':
                self._add_declaration(current, text, segment_start, position)
                segment_start = position + 1

            elif char == '{':
                if len(stack) >= MAX_NESTING_DEPTH:
                    raise HeadwindSyntaxError(
                        "Nested rules deeper than one level are not supported",
                        source=text,
                        position=position,
                    )
                selector = text[segment_start:position].strip()
                declarations: List[Declaration] = []
                stack.append((selector, declarations))
                current = declarations
                segment_start = position + 1

            elif char == '}':
                if not stack:
                    raise HeadwindSyntaxError(
                        "Unexpected '}' without a matching '{'",
                        source=text,
                        position=position,
                    )
                # Last declaration of a block needs no ';'
                self._add_declaration(current, text, segment_start, position)
                selector, declarations = stack.pop()
                result.append(NestedRule(selector, declarations))
                current = result  # type: ignore[assignment]
                segment_start = position + 1

        if stack:
            selector, _ = stack[-1]
            raise HeadwindSyntaxError(
                f"Rule '{selector}' is missing its closing '}}'",
                source=text,
                position=len(text),
            )

        self._add_declaration(current, text, segment_start, len(text))
        return result

    def _add_declaration(self, target: List, text: str, start: int, end: int) -> None:
        segment = text[start:end]
        if not segment.strip():
            return

        name, separator, value = segment.partition(':')
        name = name.strip()
        value = value.strip()

        if not separator or not name or not value:
            if self.strict:
                raise HeadwindSyntaxError(
                    f"Declaration is incorrectly formatted: {segment.strip()!r}",
                    source=text,
                    position=start,
                )
            logger.warning("Headwind: declaration is incorrectly formatted: %r", segment.strip())

        target.append(Declaration(name, value))


_default_parser = StyleParser()


def parse(text: str) -> List[ParsedNode]:
    """Parse an inline style string with the default (non-strict) parser."""
    return _default_parser.parse(text)
