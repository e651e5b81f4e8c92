"""Outputs that receive per-module resolution events."""

from modlicense.outputs.base import BaseOutput, MultiOutput
from modlicense.outputs.terminal import TerminalOutput

__all__ = ["BaseOutput", "MultiOutput", "TerminalOutput"]
