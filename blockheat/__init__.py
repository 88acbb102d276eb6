"""Block-breaking arcade game with a stage editor, stage files and a bitmap font."""

__version__ = "0.1.0"
__all__ = ["font", "stage", "model", "physics", "game", "editor"]