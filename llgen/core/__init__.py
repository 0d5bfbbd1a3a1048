# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared compiler core: numeric kinds, source spans and diagnostics.
"""

from .diagnostics import Diagnostic
from .numeric_kinds import WIDEST_FLOAT, NumericKind
from .span import Span

__all__ = ["Diagnostic", "NumericKind", "Span", "WIDEST_FLOAT"]
