# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Errors raised by the LLVM IR builder.

User-facing conditions (unknown names, unreconcilable operand kinds) derive
from `CodegenError` so front ends can convert them into diagnostics. Internal
invariant violations are not modelled here; they raise `AssertionError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from llgen.core.numeric_kinds import NumericKind


class CodegenError(Exception):
	"""Base class for builder errors a caller may want to report."""


class UnknownVariableError(CodegenError, KeyError):
	"""A variable name was referenced that was never declared."""

	def __init__(self, name: str) -> None:
		super().__init__(name)
		self.name = name

	def __str__(self) -> str:
		return f"unknown variable '{self.name}'"


class UnknownTypeError(CodegenError, ValueError):
	"""A type name does not spell any NumericKind."""

	def __init__(self, type_name: str) -> None:
		super().__init__(type_name)
		self.type_name = type_name

	def __str__(self) -> str:
		return f"unknown type '{self.type_name}'"


class MatchingOperatorNotFoundError(CodegenError):
	"""No operator instance exists for the two (original) operand kinds."""

	def __init__(self, operator: str, left: "NumericKind", right: "NumericKind") -> None:
		super().__init__(operator, left, right)
		self.operator = operator
		self.left = left
		self.right = right

	def __str__(self) -> str:
		return (
			f"no matching operator '{self.operator}' for operand types "
			f"{self.left.type_name} and {self.right.type_name}"
		)


class BuilderOwnershipError(CodegenError, RuntimeError):
	"""A builder was used from a thread other than the one that created it."""


__all__ = [
	"BuilderOwnershipError",
	"CodegenError",
	"MatchingOperatorNotFoundError",
	"UnknownTypeError",
	"UnknownVariableError",
]
