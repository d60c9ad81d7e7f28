"""Compiles parsed inline styles into atomic classes."""
import logging
from typing import Iterable, List, Sequence

from headwind.ast_nodes import CompiledCSS, Declaration, GeneratedRule, NestedRule, ParsedNode
from headwind.hashing import hash_string
from headwind.stylesheet import PLACEHOLDER

logger = logging.getLogger(__name__)

DEFAULT_CLASS_PREFIX = "hw_"


def stringify_properties(declarations: Iterable[Declaration]) -> str:
    """[("color", "red"), ("margin", "0")] -> "color: red; margin: 0" """
    return "; ".join(f"{name}: {value}" for name, value in declarations)


class StyleCompiler:
    """Turns parsed declarations into classes, inline custom properties and rules."""

    def __init__(self, class_prefix: str = DEFAULT_CLASS_PREFIX):
        self.class_prefix = class_prefix

    def compile(self, nodes: Sequence[ParsedNode]) -> CompiledCSS:
        simple = [node for node in nodes if isinstance(node, Declaration)]
        nested = [node for node in nodes if isinstance(node, NestedRule)]

        # At-rules and pseudo-class rules are mutually exclusive
        at_rules = [rule for rule in nested if rule.is_at_rule]
        pseudo_rules = [rule for rule in nested if rule.is_pseudo_class]

        for rule in nested:
            if not rule.is_at_rule and not rule.is_pseudo_class:
                logger.warning(
                    "Headwind: nested selector %r is neither a pseudo-class nor an at-rule; "
                    "its declarations are dropped",
                    rule.selector,
                )

        compiled = CompiledCSS()
        if simple:
            compiled.extend(self._compile_simple(simple))
        for rule in pseudo_rules:
            compiled.extend(self._compile_pseudo_class(rule))
        for rule in at_rules:
            compiled.extend(self._compile_at_rule(rule))
        return compiled

    def _compile_simple(self, declarations: List[Declaration]) -> CompiledCSS:
        custom_properties = [d for d in declarations if d.is_custom_property]
        normal_properties = [d for d in declarations if not d.is_custom_property]

        rule_body = f"{PLACEHOLDER} {{ {stringify_properties(normal_properties)} }}"
        class_name = self.class_prefix + hash_string(rule_body)

        return CompiledCSS(
            classes=[class_name],
            custom_properties=custom_properties,
            rules=[GeneratedRule(rule_body, "." + class_name)],
        )

    def _compile_pseudo_class(self, rule: NestedRule) -> CompiledCSS:
        rule_body = f"{PLACEHOLDER} {{ {stringify_properties(rule.declarations)} }}"
        # Keyed by the pseudo-class too: :hover and :focus with equal bodies differ
        class_name = self.class_prefix + hash_string(rule.selector + hash_string(rule_body))

        return CompiledCSS(
            classes=[class_name],
            rules=[GeneratedRule(rule_body, "." + class_name + rule.selector)],
        )

    def _compile_at_rule(self, rule: NestedRule) -> CompiledCSS:
        rule_body = f"{rule.selector} {{ {PLACEHOLDER} {{ {stringify_properties(rule.declarations)} }} }}"
        class_name = self.class_prefix + hash_string(rule.selector + hash_string(rule_body))

        return CompiledCSS(
            classes=[class_name],
            rules=[GeneratedRule(rule_body, "." + class_name)],
        )


_default_compiler = StyleCompiler()


def compile_css(nodes: Sequence[ParsedNode]) -> CompiledCSS:
    """Compile parsed nodes with the default class prefix."""
    return _default_compiler.compile(nodes)
