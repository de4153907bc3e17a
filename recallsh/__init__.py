"""recallsh: a small interactive shell with numbered command recall."""

__version__ = "0.1.0"
