"""Filesystem probing for module candidates."""

import os
import stat


def is_loadable_file(path: str) -> bool:
    """Check that path names an existing, readable, regular file.

    Symlinks are followed, so a dangling link is rejected. Directories and
    devices are rejected. Paths the OS refuses to stat (embedded NUL bytes,
    over-long names, permission errors) count as not found.

    Args:
        path: Candidate path

    Returns:
        True if the file can be handed to the engine, False otherwise
    """
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return False
    return stat.S_ISREG(st.st_mode) and os.access(path, os.R_OK)
