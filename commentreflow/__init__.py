"""
Comment reflow.

Splits comment lines that run past a maximum width and pulls short
continuation lines back up, producing text edits a host applies and
re-runs until nothing changes.

The code is organised into several modules:

* ``source`` - the comment records and the line-indexed source view a
  caller hands to the core.
* ``line_model`` - decomposes one physical comment line into its regions.
* ``classifiers`` - markup, directive and fixme recognition.
* ``overflow`` and ``underflow`` - the split and merge analyzers.
* ``engine`` - walks whole comments and drives passes to a fixed point.
* ``scanner`` - discovers comments in C-family source text.
* ``linter`` and ``lsp`` - host integrations producing findings and
  editor quick fixes.
* ``cli`` - the ``commentreflow`` command line tool.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import ReflowOptions, WorkspaceConfig, load_workspace_config
from .edits import Edit, EditKind, apply_edits
from .engine import ReflowEngine, ReflowResult, check_text, reflow_text
from .errors import ContractViolation, ReflowConfigError, ReflowError
from .line_model import CommentLine, LinePosition, Region, parse_line
from .overflow import check_overflow
from .scanner import scan_comments
from .source import Comment, CommentKind, SourcePosition, SourceText
from .underflow import check_underflow

__all__ = [
    "__version__",
    "Comment",
    "CommentKind",
    "CommentLine",
    "ContractViolation",
    "Edit",
    "EditKind",
    "LinePosition",
    "ReflowConfigError",
    "ReflowEngine",
    "ReflowError",
    "ReflowOptions",
    "ReflowResult",
    "Region",
    "SourcePosition",
    "SourceText",
    "WorkspaceConfig",
    "apply_edits",
    "check_overflow",
    "check_text",
    "check_underflow",
    "load_workspace_config",
    "parse_line",
    "reflow_text",
    "scan_comments",
]
