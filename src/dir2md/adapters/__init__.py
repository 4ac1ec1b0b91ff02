"""Filesystem adapters and root validation."""
import os

from .local import LocalAdapter


class InvalidRootError(ValueError):
    """Raised when the snapshot root is missing or not a directory."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason  # "missing" or "not_a_directory"
        if reason == "missing":
            message = f'"{path}" does not exist.'
        else:
            message = f'"{path}" is not a directory.'
        super().__init__(message)


def validate_root(path: str) -> str:
    """
    Check that a snapshot root exists and is a directory.

    Args:
        path: Directory path, absolute or relative to the working directory.

    Returns:
        The absolute path of the root.

    Raises:
        InvalidRootError: If the path is missing or not a directory.
    """
    abs_path = os.path.abspath(path)
    try:
        is_dir = os.path.isdir(abs_path) and not os.path.islink(abs_path)
        exists = os.path.lexists(abs_path)
    except (OSError, ValueError):
        is_dir, exists = False, False

    if not exists:
        raise InvalidRootError(abs_path, "missing")
    if not is_dir:
        raise InvalidRootError(abs_path, "not_a_directory")
    return abs_path


__all__ = ['LocalAdapter', 'InvalidRootError', 'validate_root']
