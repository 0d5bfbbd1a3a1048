# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Stack-driven LLVM IR builder for straight-line scalar programs.

A front end walks its expression trees in post order and calls the builder:
literals and variable loads push operands, arithmetic pops two and pushes one,
stores and prints pop one. Every value-producing instruction gets the next
virtual register, so the rendered `@main` is a single basic block ending in
`ret i32 0`.

Type reconciliation for arithmetic:
  - same class (int/int or float/float): the narrower operand is widened;
  - mixed: the integer operand is converted to the float operand's kind.

Stack underflow is not an error: arithmetic, stores and prints with too few
operands do nothing.

A builder belongs to the thread that created it; calls from other threads
raise `BuilderOwnershipError`. Independent builders do not share state.
"""

from __future__ import annotations

import functools
import threading
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from llgen.core.numeric_kinds import WIDEST_FLOAT, NumericKind
from llgen.codegen.llvm.emitter import ConstantPool, ExternalFunction, ExternalSet, InstructionLog
from llgen.codegen.llvm.errors import BuilderOwnershipError, MatchingOperatorNotFoundError, UnknownVariableError
from llgen.codegen.llvm.operands import ConstantOperand, Operand, RegisterOperand, operand_ref

ENTRY_SYMBOL = "@main"
RETURN_INSTR = "ret i32 0"
INDENT = " " * 4


@dataclass(frozen=True)
class Variable:
	"""Named stack slot: `address` is the register holding the alloca result."""

	address: int
	kind: NumericKind


@dataclass(frozen=True)
class BinaryOperator:
	symbol: str
	int_mnemonic: str
	float_mnemonic: str

	def mnemonic_for(self, kind: NumericKind) -> str:
		return self.float_mnemonic if kind.is_float() else self.int_mnemonic


ADD = BinaryOperator("+", "add nsw", "fadd")
SUBTRACT = BinaryOperator("-", "sub nsw", "fsub")
MULTIPLY = BinaryOperator("*", "mul nsw", "fmul")
DIVIDE = BinaryOperator("/", "sdiv", "fdiv")


def _owned(method):
	@functools.wraps(method)
	def wrapper(self: "LlvmBuilder", *args, **kwargs):
		if threading.get_ident() != self._owner:
			raise BuilderOwnershipError(
				f"LlvmBuilder.{method.__name__} called from a thread that does not own the builder"
			)
		return method(self, *args, **kwargs)

	return wrapper


class LlvmBuilder:
	"""Builds the textual module for one program."""

	def __init__(self) -> None:
		self._owner = threading.get_ident()
		self._log = InstructionLog()
		self._pool = ConstantPool()
		self._externals = ExternalSet()
		self._variables: Dict[str, Variable] = {}
		self._stack: List[Operand] = []

	# Inspection -----------------------------------------------------------------

	@property
	def stack(self) -> Tuple[Operand, ...]:
		return tuple(self._stack)

	@property
	def instructions(self) -> List[str]:
		return self._log.lines()

	@property
	def variables(self) -> Mapping[str, Variable]:
		return dict(self._variables)

	def does_variable_exist(self, name: str) -> bool:
		return name in self._variables

	# Declarations and storage ---------------------------------------------------

	@_owned
	def declare(self, kind: NumericKind, name: str) -> Variable:
		"""
		Allocate a stack slot for `name`.

		Redeclaring a name rebinds it to the new slot; the old slot is simply
		left unused.
		"""
		address = self._log.emit(f"alloca {kind.llvm}, align {kind.size}")
		var = Variable(address=address, kind=kind)
		self._variables[name] = var
		return var

	@_owned
	def load_variable_to_stack(self, name: str) -> RegisterOperand:
		var = self._lookup(name)
		reg = self._log.emit(f"load {var.kind.llvm}, ptr %{var.address}, align {var.kind.size}")
		operand = RegisterOperand(id=reg, kind=var.kind)
		self._stack.append(operand)
		return operand

	@_owned
	def store_to(self, name: str) -> None:
		var = self._lookup(name)
		if not self._stack:
			return
		value = self.cast_operand_to_kind(self._stack.pop(), var.kind)
		self._log.emit_void(
			f"store {var.kind.llvm} {operand_ref(value)}, ptr %{var.address}, align {var.kind.size}"
		)

	# Literals -------------------------------------------------------------------

	@_owned
	def load_int_to_stack(self, text: str) -> ConstantOperand:
		operand = ConstantOperand(kind=NumericKind.I32, text=text)
		self._stack.append(operand)
		return operand

	@_owned
	def load_real_to_stack(self, text: str) -> ConstantOperand:
		operand = ConstantOperand(kind=NumericKind.F32, text=text)
		self._stack.append(operand)
		return operand

	# I/O ------------------------------------------------------------------------

	@_owned
	def read(self, name: str) -> None:
		var = self._lookup(name)
		self._externals.require(ExternalFunction.READ)
		fmt = self._pool.intern(var.kind.format)
		self._log.emit(f"call i32 (ptr, ...) @scanf(ptr noundef {fmt}, ptr noundef %{var.address})")

	@_owned
	def write_string(self, text: str) -> None:
		self._externals.require(ExternalFunction.WRITE)
		const = self._pool.intern(text)
		self._log.emit(f"call i32 (ptr, ...) @printf(ptr noundef {const})")

	@_owned
	def write_variable(self, name: str) -> None:
		self.load_variable_to_stack(name)
		self.write_last_calculated()

	@_owned
	def write_last_calculated(self) -> None:
		"""
		Print the top of the stack.

		Floats go through C varargs, so they are always widened to double first;
		integers print at their own width.
		"""
		self._externals.require(ExternalFunction.WRITE)
		if not self._stack:
			return
		value = self._stack.pop()
		if value.kind.is_float():
			value = self.cast_operand_to_kind(value, WIDEST_FLOAT)
		fmt = self._pool.intern(value.kind.format)
		self._log.emit(
			f"call i32 (ptr, ...) @printf(ptr noundef {fmt}, {value.kind.llvm} noundef {operand_ref(value)})"
		)

	# Arithmetic -----------------------------------------------------------------

	@_owned
	def add(self) -> Optional[RegisterOperand]:
		return self._binary(ADD)

	@_owned
	def subtract(self) -> Optional[RegisterOperand]:
		return self._binary(SUBTRACT)

	@_owned
	def multiply(self) -> Optional[RegisterOperand]:
		return self._binary(MULTIPLY)

	@_owned
	def divide(self) -> Optional[RegisterOperand]:
		return self._binary(DIVIDE)

	def _binary(self, op: BinaryOperator) -> Optional[RegisterOperand]:
		# Fewer than two operands: leave the stack exactly as it was.
		if len(self._stack) < 2:
			return None
		second = self._stack.pop()
		first = self._stack.pop()
		lhs, rhs = self._reconcile(op, first, second)
		kind = lhs.kind
		reg = self._log.emit(f"{op.mnemonic_for(kind)} {kind.llvm} {operand_ref(lhs)}, {operand_ref(rhs)}")
		result = RegisterOperand(id=reg, kind=kind)
		self._stack.append(result)
		return result

	def _reconcile(self, op: BinaryOperator, first: Operand, second: Operand) -> Tuple[Operand, Operand]:
		lhs, rhs = first, second
		if lhs.kind.same_class(rhs.kind):
			if lhs.kind.size < rhs.kind.size:
				lhs = self.cast_operand_to_kind(lhs, rhs.kind)
			elif rhs.kind.size < lhs.kind.size:
				rhs = self.cast_operand_to_kind(rhs, lhs.kind)
		elif lhs.kind.is_int():
			lhs = self.cast_operand_to_kind(lhs, rhs.kind)
		else:
			rhs = self.cast_operand_to_kind(rhs, lhs.kind)
		if lhs.kind is not rhs.kind:
			raise MatchingOperatorNotFoundError(op.symbol, first.kind, second.kind)
		return lhs, rhs

	# Casts ----------------------------------------------------------------------

	@_owned
	def cast_operand_to_kind(self, operand: Operand, target: NumericKind) -> Operand:
		"""
		Convert `operand` to `target`, emitting at most one instruction.

		Identity casts return `operand` itself. Narrowing is only reached when a
		wider value is stored into a narrower variable.
		"""
		source = operand.kind
		if source is target:
			return operand
		if source.is_int() and target.is_int():
			opcode = "sext" if source.size < target.size else "trunc"
		elif source.is_float() and target.is_float():
			opcode = "fpext" if source.size < target.size else "fptrunc"
		elif source.is_int() and target.is_float():
			opcode = "sitofp"
		elif source.is_float() and target.is_int():
			opcode = "fptosi"
		else:
			raise AssertionError(f"no conversion from {source.type_name} to {target.type_name}")
		if source.same_class(target) and source.size == target.size:
			raise AssertionError(f"distinct kinds {source.type_name}/{target.type_name} share a width")
		reg = self._log.emit(f"{opcode} {source.llvm} {operand_ref(operand)} to {target.llvm}")
		return RegisterOperand(id=reg, kind=target)

	# Output ---------------------------------------------------------------------

	@_owned
	def build(self) -> str:
		"""Render the module. Pure: repeated calls give identical text."""
		body = [f"{INDENT}{line}" for line in [*self._log.lines(), RETURN_INSTR]]
		parts = [
			"\n".join(self._pool.render()),
			"\n",
			"\n",
			f"define i32 {ENTRY_SYMBOL}() {{\n",
			"\n".join(body),
			"\n",
			"}\n",
			"\n",
			"\n".join(self._externals.render()),
		]
		return "".join(parts)

	def _lookup(self, name: str) -> Variable:
		try:
			return self._variables[name]
		except KeyError:
			raise UnknownVariableError(name) from None


__all__ = [
	"ADD",
	"DIVIDE",
	"MULTIPLY",
	"SUBTRACT",
	"BinaryOperator",
	"LlvmBuilder",
	"Variable",
]
