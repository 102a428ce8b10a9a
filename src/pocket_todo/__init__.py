"""pocket-todo: a small to-do list with write-through local persistence."""

__version__ = "0.1.0"
