"""
Source registry for the EcoBoard leaderboard.

Maps source type names to EntrySource implementations, resolved lazily so
optional transports are only imported when used.
"""

from typing import TYPE_CHECKING, Dict, Type
from importlib import import_module

from core.entry_source import EntrySource

if TYPE_CHECKING:
    from ecoboard.config import SourceConfig


# Registry of available sources (resolved lazily at runtime).
SOURCE_REGISTRY: Dict[str, str] = {
    "memory": "ecoboard.sources.memory.InMemoryEntrySource",
    "json_file": "ecoboard.sources.json_file.JsonFileEntrySource",
    "http": "ecoboard.sources.http.HttpEntrySource",
}


def _import_class(class_path: str) -> Type:
    """
    Import a class from its fully qualified path.

    Args:
        class_path: Dot-separated path like "module.submodule.ClassName"

    Returns:
        The class object

    Raises:
        ImportError: If module or class cannot be found
    """
    parts = class_path.rsplit(".", 1)
    if len(parts) != 2:
        raise ImportError(f"Invalid class path: {class_path}")

    module_path, class_name = parts
    module = import_module(module_path)
    return getattr(module, class_name)


def get_source_class(source_type: str) -> Type[EntrySource]:
    """
    Get the EntrySource class for a source type.

    Raises:
        ValueError: If source_type is not registered
    """
    if source_type not in SOURCE_REGISTRY:
        raise ValueError(
            f"Unknown source type: {source_type}. "
            f"Available: {list(SOURCE_REGISTRY.keys())}"
        )
    return _import_class(SOURCE_REGISTRY[source_type])


def create_source(config: "SourceConfig") -> EntrySource:
    """Instantiate the configured source via its ``from_config`` constructor."""
    source_class = get_source_class(config.type)
    return source_class.from_config(config)


def register_source(source_type: str, class_path: str) -> None:
    """
    Register a new source type.

    Args:
        source_type: Unique identifier
        class_path: Dotted path to the EntrySource subclass
    """
    SOURCE_REGISTRY[source_type] = class_path


def list_sources() -> Dict[str, str]:
    return dict(SOURCE_REGISTRY)
