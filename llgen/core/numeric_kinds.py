# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Closed scalar type lattice for the emitter.

Four kinds exist: i32, i64, f32, f64. Everything the emitter needs to know
about a kind (LLVM spelling, byte size, int/float class, printf/scanf format)
lives in one table so promotion decisions stay in a single place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


@dataclass(frozen=True)
class _KindInfo:
	"""Static metadata for one NumericKind."""

	llvm: str
	size: int
	is_float: bool
	format: str


class NumericKind(Enum):
	"""Scalar numeric kinds; the enum value is the source-level type name."""

	I32 = "i32"
	I64 = "i64"
	F32 = "f32"
	F64 = "f64"

	@classmethod
	def from_type_name(cls, type_name: Optional[str]) -> Optional["NumericKind"]:
		"""Return the kind spelled `type_name`, or None when no kind matches."""
		for kind in cls:
			if kind.value == type_name:
				return kind
		return None

	@classmethod
	def parse(cls, type_name: str) -> "NumericKind":
		"""Like `from_type_name`, but raise UnknownTypeError on a miss."""
		kind = cls.from_type_name(type_name)
		if kind is None:
			from llgen.codegen.llvm.errors import UnknownTypeError

			raise UnknownTypeError(type_name)
		return kind

	@property
	def type_name(self) -> str:
		return self.value

	@property
	def llvm(self) -> str:
		return _KIND_INFO[self].llvm

	@property
	def size(self) -> int:
		return _KIND_INFO[self].size

	@property
	def format(self) -> str:
		return _KIND_INFO[self].format

	def is_float(self) -> bool:
		return _KIND_INFO[self].is_float

	def is_int(self) -> bool:
		return not _KIND_INFO[self].is_float

	def same_class(self, other: "NumericKind") -> bool:
		"""True when both kinds are ints or both are floats."""
		return self.is_float() == other.is_float()


_KIND_INFO: Dict[NumericKind, _KindInfo] = {
	NumericKind.I32: _KindInfo(llvm="i32", size=4, is_float=False, format="%d"),
	NumericKind.I64: _KindInfo(llvm="i64", size=8, is_float=False, format="%ld"),
	NumericKind.F32: _KindInfo(llvm="float", size=4, is_float=True, format="%f"),
	NumericKind.F64: _KindInfo(llvm="double", size=8, is_float=True, format="%lf"),
}

# Widest float; printf varargs always receive doubles.
WIDEST_FLOAT = NumericKind.F64


__all__ = ["NumericKind", "WIDEST_FLOAT"]
