# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Operands held on the builder's evaluation stack.

An operand is either a virtual register produced by an earlier instruction or
an immediate literal that has not been materialized. The set is closed; code
that switches on operands must reject anything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from llgen.core.numeric_kinds import NumericKind


@dataclass(frozen=True)
class RegisterOperand:
	"""Result of a value-producing instruction (`%<id>`)."""

	id: int
	kind: NumericKind


@dataclass(frozen=True)
class ConstantOperand:
	"""Immediate literal; `text` is emitted verbatim."""

	kind: NumericKind
	text: str


Operand = Union[RegisterOperand, ConstantOperand]


def operand_ref(operand: Operand) -> str:
	"""Render an operand the way it appears inside an instruction."""
	if isinstance(operand, RegisterOperand):
		return f"%{operand.id}"
	if isinstance(operand, ConstantOperand):
		return operand.text
	raise AssertionError(f"unexpected operand {operand!r}")


__all__ = ["ConstantOperand", "Operand", "RegisterOperand", "operand_ref"]
