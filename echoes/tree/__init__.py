"""Tree — реестр identifier → коллекция, create-and-seed протокол."""

from .registry import Tree

__all__ = ["Tree"]
