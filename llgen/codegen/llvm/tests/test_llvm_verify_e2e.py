# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Emitted modules are accepted by LLVM (llvmlite) and run correctly when linked
with clang.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from llgen.codegen.llvm import LlvmBuilder
from llgen.codegen.llvm.toolchain import find_clang
from llgen.core.numeric_kinds import NumericKind


def _mixed_module() -> str:
	b = LlvmBuilder()
	b.declare(NumericKind.I32, "i")
	b.declare(NumericKind.I64, "l")
	b.declare(NumericKind.F32, "f")
	b.declare(NumericKind.F64, "d")
	b.load_int_to_stack("6")
	b.load_int_to_stack("7")
	b.multiply()
	b.store_to("i")
	b.load_variable_to_stack("i")
	b.store_to("l")
	b.load_real_to_stack("1.5")
	b.load_variable_to_stack("l")
	b.add()
	b.store_to("f")
	b.load_variable_to_stack("f")
	b.load_int_to_stack("2")
	b.divide()
	b.store_to("d")
	b.write_string("i=")
	b.write_variable("i")
	b.write_string(" l=")
	b.write_variable("l")
	b.write_string(" f=")
	b.write_variable("f")
	b.write_string(" d=")
	b.write_variable("d")
	return b.build()


def _read_module() -> str:
	b = LlvmBuilder()
	b.declare(NumericKind.I32, "x")
	b.read("x")
	b.load_variable_to_stack("x")
	b.load_int_to_stack("2")
	b.multiply()
	b.write_last_calculated()
	return b.build()


def test_emitted_modules_verify():
	pytest.importorskip("llvmlite")
	from llgen.codegen.llvm.verify import verify_ir

	assert verify_ir(_mixed_module()) == []
	assert verify_ir(_read_module()) == []
	assert verify_ir(LlvmBuilder().build()) == []


def test_verify_reports_broken_ir():
	pytest.importorskip("llvmlite")
	from llgen.codegen.llvm.verify import verify_ir

	errors = verify_ir("define i32 @main() {\n    %1 = add i32 1, 2.0\n    ret i32 0\n}\n")
	assert len(errors) == 1
	assert errors[0]


def _compile(ir: str, tmp_path: Path) -> Path:
	clang = find_clang()
	if clang is None:
		pytest.skip("clang not available")
	ir_path = tmp_path / "prog.ll"
	bin_path = tmp_path / "prog"
	ir_path.write_text(ir)
	res = subprocess.run([clang, "-x", "ir", str(ir_path), "-o", str(bin_path)], capture_output=True, text=True)
	if res.returncode != 0:
		raise RuntimeError(f"clang failed: {res.stderr}")
	return bin_path


def test_e2e_mixed_arithmetic_output(tmp_path: Path):
	"""
	i = 6*7; l = i; f = 1.5 + l; d = f / 2.
	"""
	binary = _compile(_mixed_module(), tmp_path)
	run = subprocess.run([str(binary)], capture_output=True, text=True)
	assert run.returncode == 0
	assert run.stdout == "i=42 l=42 f=43.500000 d=21.750000"


def test_e2e_read_then_print(tmp_path: Path):
	binary = _compile(_read_module(), tmp_path)
	run = subprocess.run([str(binary)], input="21\n", capture_output=True, text=True)
	assert run.returncode == 0
	assert run.stdout == "42"
