"""Headwind: compiles inline styles into atomic, deduplicated CSS classes."""
from headwind.ast_nodes import CompiledCSS, Declaration, GeneratedRule, NestedRule
from headwind.compiler import StyleCompiler, compile_css, stringify_properties
from headwind.config import HeadwindConfig, load_config
from headwind.exceptions import HeadwindError, HeadwindSyntaxError
from headwind.hashing import hash_string
from headwind.hook import rewrite_attrs, rewrite_element
from headwind.middleware import HeadwindMiddleware
from headwind.parser import StyleParser, parse
from headwind.render import RenderPass, current_render_pass
from headwind.stylesheet import PLACEHOLDER, Stylesheet

__all__ = [
    "CompiledCSS",
    "Declaration",
    "GeneratedRule",
    "NestedRule",
    "StyleCompiler",
    "compile_css",
    "stringify_properties",
    "HeadwindConfig",
    "load_config",
    "HeadwindError",
    "HeadwindSyntaxError",
    "hash_string",
    "rewrite_attrs",
    "rewrite_element",
    "HeadwindMiddleware",
    "StyleParser",
    "parse",
    "RenderPass",
    "current_render_pass",
    "PLACEHOLDER",
    "Stylesheet",
]
