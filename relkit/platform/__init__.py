"""Process execution primitives."""

from .process import CommandRunner, ProcessError, ProcessRunner, run

__all__ = ["CommandRunner", "ProcessError", "ProcessRunner", "run"]
