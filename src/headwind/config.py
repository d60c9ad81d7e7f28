"""Configuration loader for Headwind."""
import importlib.util
import logging
from dataclasses import dataclass
from pathlib import Path

from headwind.compiler import DEFAULT_CLASS_PREFIX, StyleCompiler
from headwind.parser import StyleParser

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "headwind.config.py"
DEFAULT_STYLE_ID = "headwind"


@dataclass
class HeadwindConfig:
    class_prefix: str = DEFAULT_CLASS_PREFIX
    style_id: str = DEFAULT_STYLE_ID  # id of the emitted <style> block
    strict: bool = False  # raise on malformed declarations

    def make_parser(self) -> StyleParser:
        return StyleParser(strict=self.strict)

    def make_compiler(self) -> StyleCompiler:
        return StyleCompiler(class_prefix=self.class_prefix)


def load_config(path: Path | str | None = None) -> HeadwindConfig:
    """
    Load configuration from a python file.

    If path is provided, loads from there.
    Otherwise, looks for headwind.config.py in the current working directory.

    Uppercase variables are mapped onto HeadwindConfig:
    CLASS_PREFIX -> class_prefix, STYLE_ID -> style_id, STRICT -> strict.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        path = Path(path)

    if not path.exists():
        return HeadwindConfig()

    try:
        spec = importlib.util.spec_from_file_location("headwind_config", path)
        if spec is None or spec.loader is None:
            return HeadwindConfig()

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return HeadwindConfig()

    config = HeadwindConfig()
    if hasattr(module, "CLASS_PREFIX"):
        config.class_prefix = str(module.CLASS_PREFIX)
    if hasattr(module, "STYLE_ID"):
        config.style_id = str(module.STYLE_ID)
    if hasattr(module, "STRICT"):
        config.strict = bool(module.STRICT)
    return config
