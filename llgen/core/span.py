# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source locations attached to diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Best-effort file/line/column range; all fields optional (Span() is unknown)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None

	@classmethod
	def from_meta(cls, meta: Any, file: Optional[str] = None) -> "Span":
		"""
		Build a Span from a lark `Meta`/`Token` (anything with line/column attrs).

		Missing attributes stay None; lark leaves `Meta` empty for rules that
		matched no tokens.
		"""
		if meta is None:
			return cls(file=file)
		if isinstance(meta, cls):
			return meta
		return cls(
			file=file,
			line=getattr(meta, "line", None),
			column=getattr(meta, "column", None),
			end_line=getattr(meta, "end_line", None),
			end_column=getattr(meta, "end_column", None),
		)

	def location(self) -> str:
		"""`line:col`, with `?` for unknown parts."""
		line = "?" if self.line is None else str(self.line)
		col = "?" if self.column is None else str(self.column)
		return f"{line}:{col}"


__all__ = ["Span"]
