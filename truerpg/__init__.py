"""A small top-down role-playing game on an entity-component-system scene."""

__version__ = "0.1.0"