# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source front end: lark grammar for the llgen language and the walker that
drives `LlvmBuilder`.
"""

from .parser import CompileResult, compile_source, lower_program, parse_program

__all__ = ["CompileResult", "compile_source", "lower_program", "parse_program"]
