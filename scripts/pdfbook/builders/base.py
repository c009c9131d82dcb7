"""
Base builder class for output formats.

Subclasses implement `build()` and set `format_name`.
Shared logic (tool checks, command execution, logging) lives here.
"""

import shutil
import subprocess
import sys
from abc import ABC, abstractmethod

from pdfbook.errors import RenderError, ToolNotFoundError


class BaseBuilder(ABC):
    """
    Abstract base for format builders.

    Subclasses must define:
        format_name:  str    — human-readable name ("PDF")
        build():      method — the actual build logic
    """

    format_name = None  # Override in subclass

    def __init__(self, config, source, verbose=False):
        self.config = config
        self.source = source
        self.verbose = verbose

    # ── Output path ────────────────────────────────────────

    @property
    def output_file(self):
        return self.config.path(self.config.output)

    # ── Logging ────────────────────────────────────────────

    def log(self, msg):
        if self.verbose:
            print(msg)

    def header(self):
        print(f"\n{'─' * 60}")
        print(f"  Building {self.format_name}: {self.output_file}")
        print(f"{'─' * 60}")

    # ── External tools ─────────────────────────────────────

    @staticmethod
    def check_tool(name, hint=None):
        """Raise ToolNotFoundError unless `name` is on PATH."""
        if not shutil.which(name):
            raise ToolNotFoundError(name, hint)

    def exec_cmd(self, cmd, label="Command"):
        """Execute a command. Raises RenderError on non-zero exit."""
        self.log(f"  $ {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=not self.verbose,
                text=True,
            )
        except FileNotFoundError:
            raise ToolNotFoundError(cmd[0])

        if result.returncode != 0:
            print(f"  ✗ {label} failed (exit {result.returncode})", file=sys.stderr)
            if result.stderr:
                for line in result.stderr.strip().splitlines()[:20]:
                    print(f"    {line}", file=sys.stderr)
            raise RenderError(label, result.returncode)

    # ── Abstract interface ─────────────────────────────────

    @abstractmethod
    def build(self):
        """Execute the build. Raises BuildError on failure."""
        ...
