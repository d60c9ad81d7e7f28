"""Node definitions for parsed and compiled styles."""
from dataclasses import dataclass, field
from typing import List, NamedTuple, Union


class Declaration(NamedTuple):
    """color: red"""
    name: str
    value: str

    @property
    def is_custom_property(self) -> bool:
        return self.name.startswith("--")


class NestedRule(NamedTuple):
    """:hover { color: blue } or @media (...) { ... }"""
    selector: str
    declarations: List[Declaration]

    @property
    def is_at_rule(self) -> bool:
        return self.selector.startswith("@")

    @property
    def is_pseudo_class(self) -> bool:
        return self.selector.startswith(":")


ParsedNode = Union[Declaration, NestedRule]


class GeneratedRule(NamedTuple):
    """A rule body (selector list replaced by a placeholder) and one selector for it."""
    rule_body: str
    selector: str


@dataclass
class CompiledCSS:
    """Result of compiling one inline style."""
    classes: List[str] = field(default_factory=list)
    custom_properties: List[Declaration] = field(default_factory=list)  # stay inline
    rules: List[GeneratedRule] = field(default_factory=list)

    def extend(self, other: "CompiledCSS") -> None:
        self.classes.extend(other.classes)
        self.custom_properties.extend(other.custom_properties)
        self.rules.extend(other.rules)

    def __str__(self) -> str:
        return f"CompiledCSS(classes={self.classes}, custom={len(self.custom_properties)}, rules={len(self.rules)})"
