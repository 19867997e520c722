"""Access control models, policy storage in files and effect merging."""

__version__ = "0.1.0"

__all__ = ["config", "effect", "errors", "logger", "model", "persist", "file_adapter"]