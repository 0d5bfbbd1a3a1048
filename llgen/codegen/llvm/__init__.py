# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Textual LLVM IR emission for straight-line scalar programs.

`LlvmBuilder` is the entry point; `verify_ir` lives in `llgen.codegen.llvm.verify`
and is imported lazily so the builder works without llvmlite installed.
"""

from .builder import ADD, DIVIDE, MULTIPLY, SUBTRACT, BinaryOperator, LlvmBuilder, Variable
from .emitter import ConstantPool, ExternalFunction, ExternalSet, InstructionLog
from .errors import (
	BuilderOwnershipError,
	CodegenError,
	MatchingOperatorNotFoundError,
	UnknownTypeError,
	UnknownVariableError,
)
from .operands import ConstantOperand, Operand, RegisterOperand, operand_ref

__all__ = [
	"ADD",
	"DIVIDE",
	"MULTIPLY",
	"SUBTRACT",
	"BinaryOperator",
	"BuilderOwnershipError",
	"CodegenError",
	"ConstantOperand",
	"ConstantPool",
	"ExternalFunction",
	"ExternalSet",
	"InstructionLog",
	"LlvmBuilder",
	"MatchingOperatorNotFoundError",
	"Operand",
	"RegisterOperand",
	"UnknownTypeError",
	"UnknownVariableError",
	"Variable",
	"operand_ref",
]
