# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Check emitted module text with LLVM's own parser and verifier (via llvmlite).
"""

from __future__ import annotations

from typing import List

from llvmlite import binding as llvm  # type: ignore

_LLVM_READY = False


def _ensure_llvm() -> None:
	global _LLVM_READY
	if _LLVM_READY:
		return
	try:
		llvm.initialize()
	except RuntimeError:
		# Recent llvmlite initializes the core itself and rejects the call.
		pass
	_LLVM_READY = True


def verify_ir(text: str) -> List[str]:
	"""
	Parse and verify `text` as an LLVM module.

	Returns the error messages; an empty list means the module is valid.
	"""
	_ensure_llvm()
	try:
		mod = llvm.parse_assembly(text)
		mod.verify()
	except RuntimeError as err:
		return [str(err).strip()]
	return []


__all__ = ["verify_ir"]
