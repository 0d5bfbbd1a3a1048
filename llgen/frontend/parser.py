# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parse llgen source and drive an `LlvmBuilder` from the parse tree.

The walker is a plain post-order traversal: literals and variable reads push
operands, binary nodes evaluate both sides and then apply the operator, and
statements finish with a store or a print. Name resolution happens here, not
in the builder: every statement's names are checked with
`does_variable_exist` before any builder call so use-before-declare becomes a
diagnostic with a span.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from llgen.codegen.llvm import (
	CodegenError,
	LlvmBuilder,
	MatchingOperatorNotFoundError,
	UnknownTypeError,
	UnknownVariableError,
)
from llgen.core.diagnostics import Diagnostic, has_errors
from llgen.core.numeric_kinds import NumericKind
from llgen.core.span import Span

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)

_BINARY_NODES = {
	"add": LlvmBuilder.add,
	"sub": LlvmBuilder.subtract,
	"mul": LlvmBuilder.multiply,
	"div": LlvmBuilder.divide,
}


@dataclass
class CompileResult:
	"""IR text (None when an error was reported) plus all diagnostics."""

	ir: Optional[str]
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return self.ir is not None


def parse_program(source: str) -> Tree:
	"""Parse `source`; raises lark's `UnexpectedInput` on a syntax error."""
	return _PARSER.parse(source)


def compile_source(source: str, file: Optional[str] = None) -> CompileResult:
	"""
	Compile llgen source text to LLVM IR.

	Syntax errors stop at the first one. Semantic errors are collected across
	statements; lowering stops at the first statement with an error because
	the builder's operand stack is no longer meaningful after it.
	"""
	try:
		tree = parse_program(source)
	except UnexpectedInput as err:
		return CompileResult(ir=None, diagnostics=[_syntax_diagnostic(err, file)])
	builder = LlvmBuilder()
	diagnostics = lower_program(tree, builder, file=file)
	if has_errors(diagnostics):
		return CompileResult(ir=None, diagnostics=diagnostics)
	return CompileResult(ir=builder.build(), diagnostics=diagnostics)


def lower_program(tree: Tree, builder: LlvmBuilder, file: Optional[str] = None) -> List[Diagnostic]:
	"""Feed every statement of a parsed program into `builder`."""
	lowerer = _Lowerer(builder, file)
	for stmt in tree.children:
		if isinstance(stmt, Tree):
			lowerer.lower_stmt(stmt)
	return lowerer.diagnostics


class _Lowerer:
	def __init__(self, builder: LlvmBuilder, file: Optional[str]) -> None:
		self.builder = builder
		self.file = file
		self.diagnostics: List[Diagnostic] = []
		self._halted = False

	def lower_stmt(self, stmt: Tree) -> None:
		span = Span.from_meta(stmt.meta, self.file)
		if stmt.data == "decl":
			type_tree, name_tok = stmt.children
			type_tok = type_tree.children[0]
			try:
				kind = NumericKind.parse(str(type_tok))
			except UnknownTypeError as err:
				self._error(str(err), Span.from_meta(type_tok, self.file), code=_error_code(err))
				return
			# Declarations keep applying after an error so later statements still
			# resolve their names.
			self.builder.declare(kind, str(name_tok))
			return
		if not self._names_declared(stmt):
			return
		if stmt.data == "read_stmt":
			name = str(stmt.children[0])
			self._run(lambda: self.builder.read(name), span)
		elif stmt.data == "write_string":
			text = str(stmt.children[0])[1:-1]
			self._run(lambda: self.builder.write_string(text), span)
		elif stmt.data == "write_expr":
			expr = stmt.children[0]
			if isinstance(expr, Tree) and expr.data == "var":
				name = str(expr.children[0])
				self._run(lambda: self.builder.write_variable(name), span)
			else:
				self._run(lambda: self._write_expr(expr), span)
		elif stmt.data == "assign_stmt":
			name_tok, expr = stmt.children
			self._run(lambda: self._assign(str(name_tok), expr), span)
		else:
			raise AssertionError(f"unhandled statement node {stmt.data!r}")

	def _write_expr(self, expr: Tree) -> None:
		self._eval(expr)
		self.builder.write_last_calculated()

	def _assign(self, name: str, expr: Tree) -> None:
		self._eval(expr)
		self.builder.store_to(name)

	def _eval(self, expr: Tree) -> None:
		kind = expr.data
		if kind == "int_lit":
			self.builder.load_int_to_stack(str(expr.children[0]))
		elif kind == "real_lit":
			self.builder.load_real_to_stack(_float_literal(str(expr.children[0])))
		elif kind == "var":
			self.builder.load_variable_to_stack(str(expr.children[0]))
		elif kind in _BINARY_NODES:
			left, right = expr.children
			self._eval(left)
			self._eval(right)
			_BINARY_NODES[kind](self.builder)
		else:
			raise AssertionError(f"unhandled expression node {kind!r}")

	def _names_declared(self, stmt: Tree) -> bool:
		ok = True
		for tok in _name_tokens(stmt):
			if not self.builder.does_variable_exist(str(tok)):
				self._error(
					f"use of undeclared variable '{tok}'",
					Span.from_meta(tok, self.file),
					code="unknown-variable",
				)
				ok = False
		return ok

	def _run(self, action, span: Span) -> None:
		if self._halted:
			return
		try:
			action()
		except CodegenError as err:
			self._error(str(err), span, code=_error_code(err))

	def _error(self, message: str, span: Span, code: str) -> None:
		self._halted = True
		self.diagnostics.append(Diagnostic(message=message, code=code, phase="codegen", span=span))


def _name_tokens(tree: Tree) -> Iterator[Token]:
	for child in tree.children:
		if isinstance(child, Token):
			if child.type == "NAME":
				yield child
		else:
			yield from _name_tokens(child)


def _float_literal(text: str) -> str:
	"""
	Spell a decimal literal the way LLVM accepts it as a `float` constant.

	LLVM rejects decimal float constants that are not exactly representable
	(`0.1`), so the value is rounded to single precision and written in LLVM's
	hexadecimal form: the 64-bit IEEE pattern of that rounded value. Literals
	beyond the single-precision range become infinity.
	"""
	try:
		(single,) = struct.unpack("<f", struct.pack("<f", float(text)))
	except OverflowError:
		single = math.inf
	(bits,) = struct.unpack("<Q", struct.pack("<d", single))
	return f"0x{bits:016X}"


def _error_code(err: CodegenError) -> str:
	if isinstance(err, UnknownVariableError):
		return "unknown-variable"
	if isinstance(err, UnknownTypeError):
		return "unknown-type"
	if isinstance(err, MatchingOperatorNotFoundError):
		return "no-matching-operator"
	return "codegen"


def _syntax_diagnostic(err: UnexpectedInput, file: Optional[str]) -> Diagnostic:
	if isinstance(err, UnexpectedCharacters):
		message = f"unexpected character {err.char!r}"
	elif isinstance(err, UnexpectedEOF):
		message = "unexpected end of input"
	elif isinstance(err, UnexpectedToken):
		if err.token.type == "$END":
			message = "unexpected end of input"
		else:
			message = f"unexpected token {str(err.token)!r}"
	else:
		message = "syntax error"
	line = getattr(err, "line", None)
	column = getattr(err, "column", None)
	span = Span(
		file=file,
		line=line if isinstance(line, int) and line > 0 else None,
		column=column if isinstance(column, int) and column > 0 else None,
	)
	notes = []
	expected = getattr(err, "expected", None)
	if expected:
		notes.append("expected one of: " + ", ".join(sorted(expected)))
	return Diagnostic(message=message, code="syntax", phase="parser", span=span, notes=notes)


__all__ = ["CompileResult", "compile_source", "lower_program", "parse_program"]
