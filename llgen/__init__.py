# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
llgen: a tiny scalar language lowered to textual LLVM IR.

Packages:
  core:          numeric kinds, spans, diagnostics
  codegen.llvm:  the stack-driven IR builder and IR verification
  frontend:      lark grammar and the walker that drives the builder
  driver:        `python -m llgen` command line
"""

__version__ = "0.1.0"

__all__ = ["core", "codegen", "frontend", "driver"]
