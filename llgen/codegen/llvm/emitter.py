# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Bookkeeping for one emitted function body.

`InstructionLog` numbers value-producing instructions (`%1`, `%2`, ...) in
emission order with no gaps, so the numbering and the textual order never
diverge.

`ConstantPool` and `ExternalSet` deduplicate module-level entries while keeping
first-use order so the rendered module is byte-for-byte reproducible.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List


class ExternalFunction(Enum):
	"""C runtime functions the emitted module may call."""

	READ = "declare i32 @scanf(ptr noundef, ...)"
	WRITE = "declare i32 @printf(ptr noundef, ...)"

	@property
	def declaration(self) -> str:
		return self.value


class InstructionLog:
	"""Ordered instruction lines plus the next free virtual register id."""

	def __init__(self) -> None:
		self._lines: List[str] = []
		self._next_id = 1

	def emit(self, instruction: str) -> int:
		"""Append `%<id> = <instruction>` and return the id it was given."""
		reg_id = self._next_id
		self._lines.append(f"%{reg_id} = {instruction}")
		self._next_id += 1
		return reg_id

	def emit_void(self, instruction: str) -> None:
		"""Append an instruction that produces no value; consumes no id."""
		self._lines.append(instruction)

	@property
	def next_id(self) -> int:
		return self._next_id

	def lines(self) -> List[str]:
		return list(self._lines)

	def __len__(self) -> int:
		return len(self._lines)


class ConstantPool:
	"""Content-addressed string constants, ids assigned on first use."""

	def __init__(self) -> None:
		self._ids: Dict[str, int] = {}

	def intern(self, text: str) -> str:
		"""Return the global symbol (`@.str.<id>`) for `text`, adding it if new."""
		const_id = self._ids.get(text)
		if const_id is None:
			const_id = len(self._ids) + 1
			self._ids[text] = const_id
		return symbol_for(const_id)

	def render(self) -> List[str]:
		return [render_string_constant(const_id, text) for text, const_id in self._ids.items()]

	def __contains__(self, text: object) -> bool:
		return text in self._ids

	def __len__(self) -> int:
		return len(self._ids)


class ExternalSet:
	"""Insertion-ordered set of required external declarations."""

	def __init__(self) -> None:
		self._required: Dict[ExternalFunction, None] = {}

	def require(self, fn: ExternalFunction) -> None:
		self._required.setdefault(fn, None)

	def render(self) -> List[str]:
		return [fn.declaration for fn in self._required]

	def __contains__(self, fn: object) -> bool:
		return fn in self._required

	def __iter__(self) -> Iterator[ExternalFunction]:
		return iter(self._required)

	def __len__(self) -> int:
		return len(self._required)


def symbol_for(const_id: int) -> str:
	return f"@.str.{const_id}"


def render_string_constant(const_id: int, text: str) -> str:
	"""
	Render a private C string global.

	The array length counts UTF-8 bytes plus the terminating NUL. Only the NUL
	is escaped; the content is emitted as given.
	"""
	length = len(text.encode("utf-8")) + 1
	return f'{symbol_for(const_id)} = private unnamed_addr constant [{length} x i8] c"{text}\\00", align 1'


__all__ = [
	"ConstantPool",
	"ExternalFunction",
	"ExternalSet",
	"InstructionLog",
	"render_string_constant",
	"symbol_for",
]
