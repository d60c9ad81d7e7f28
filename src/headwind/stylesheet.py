"""Per render pass accumulator of generated rules."""
import html
from typing import Dict, Iterable, List, Tuple

# Stands where the comma-separated selector list goes, so the list can sit
# inside a rule body (e.g. within a media query). Part of every hashed rule
# body, so it must stay constant.
PLACEHOLDER = "ZTc5OGY2MDUtMTFkNy00ODJmLWI4NmMtZjExYzA5MzdiZjc5"


class Stylesheet:
    """Maps rule bodies to the selectors sharing them, deduplicating both."""

    def __init__(self) -> None:
        # rule_body -> selectors (dict keys as an insertion-ordered set)
        self._rules: Dict[str, Dict[str, None]] = {}

    def merge(self, rule_body: str, selector: str) -> bool:
        """Add selector to rule_body. Returns True if the rule body is new."""
        selectors = self._rules.get(rule_body)
        if selectors is None:
            self._rules[rule_body] = {selector: None}
            return True
        selectors[selector] = None
        return False

    def merge_rules(self, rules: Iterable[Tuple[str, str]]) -> None:
        for rule_body, selector in rules:
            self.merge(rule_body, selector)

    def selectors(self, rule_body: str) -> List[str]:
        return list(self._rules.get(rule_body, {}))

    def serialize(self) -> str:
        """Render all rules as CSS text, in first-seen order."""
        rendered = []
        for rule_body, selectors in self._rules.items():
            selector_list = ", ".join(selectors)
            rendered.append(rule_body.replace(PLACEHOLDER, selector_list, 1))
        return "\n".join(rendered)

    def clear(self) -> None:
        self._rules.clear()

    def drain(self) -> str:
        """Serialize, then clear. Called once at the end of a render pass."""
        css = self.serialize()
        self.clear()
        return css

    def render(self, style_id: str = "headwind") -> str:
        """Render collected rules as a single <style> block."""
        if not self._rules:
            return ""
        return f'<style id="{html.escape(style_id)}">{escape_style_text(self.serialize())}</style>'

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_body: object) -> bool:
        return rule_body in self._rules


def escape_style_text(css: str) -> str:
    """Replace `<` with its CSS escape so the text cannot close the <style> element."""
    return css.replace("<", "\\3c ")
