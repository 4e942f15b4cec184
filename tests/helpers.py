"""Shared helpers for qjsx loader tests."""

from pathlib import Path


def write_module(path: Path, source: str = "export default 1;\n") -> Path:
    """Create a module file (and its parent directories)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path
