"""
Exception taxonomy for the book build.

Every failure is fatal: library code raises, the CLI reports and exits 1.
"""


class BuildError(Exception):
    """Base class for all build failures."""
    pass


class ConfigError(BuildError):
    """Raised when book.yaml is unreadable or invalid."""
    pass


class ToolNotFoundError(BuildError):
    """Raised when a required external executable is not on PATH."""

    def __init__(self, tool, hint=None):
        self.tool = tool
        self.hint = hint
        msg = f"{tool} not found in PATH."
        if hint:
            msg = f"{msg} ({hint})"
        super().__init__(msg)


class ResolutionError(BuildError):
    """Raised when no input files can be discovered."""
    pass


class MissingFileError(BuildError):
    """Raised when a resolved chapter file does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"missing file: {path}")


class UnreadableFileError(BuildError):
    """Raised when an input file exists but cannot be read as UTF-8 text."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read file: {path} ({reason})")


class RenderError(BuildError):
    """Raised when pandoc exits non-zero."""

    def __init__(self, label, returncode):
        self.label = label
        self.returncode = returncode
        super().__init__(f"{label} failed (exit {returncode})")
