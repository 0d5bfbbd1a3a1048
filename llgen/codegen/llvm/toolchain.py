# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
External LLVM toolchain lookup.
"""

from __future__ import annotations

import os
import shutil
from typing import Optional


def find_clang() -> Optional[str]:
	"""Locate clang: `$CLANG_BIN`, then `clang-15`, then `clang`."""
	clang_bin = os.environ.get("CLANG_BIN") or "clang-15"
	return shutil.which(clang_bin) or shutil.which("clang")


__all__ = ["find_clang"]
