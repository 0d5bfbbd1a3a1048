# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`python -m llgen` driver: output routing, diagnostics and exit codes.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

import pytest

from llgen.codegen.llvm.toolchain import find_clang
from llgen.driver import main

PROGRAM = """
i32 x;
read x;
x = x * 2 + 1;
write "x=";
write x;
"""


def _write_src(tmp_path: Path, text: str = PROGRAM) -> Path:
	src = tmp_path / "prog.llg"
	src.write_text(text)
	return src


def test_ir_goes_to_stdout_by_default(tmp_path: Path, capsys):
	src = _write_src(tmp_path)
	assert main([str(src)]) == 0
	out = capsys.readouterr()
	assert out.out.startswith('@.str.1 = private unnamed_addr constant [3 x i8] c"%d\\00", align 1')
	assert "define i32 @main() {" in out.out
	assert out.err == ""


def test_emit_ir_writes_file(tmp_path: Path, capsys):
	src = _write_src(tmp_path)
	ir_path = tmp_path / "out" / "prog.ll"
	assert main([str(src), "--emit-ir", str(ir_path)]) == 0
	assert capsys.readouterr().out == ""
	text = ir_path.read_text()
	assert "@scanf" in text and "@printf" in text


def test_errors_are_printed_human_readable(tmp_path: Path, capsys):
	src = _write_src(tmp_path, "i32 x;\nwrite y;\n")
	assert main([str(src)]) == 1
	out = capsys.readouterr()
	assert out.out == ""
	assert out.err.strip() == f"{src}:2:7: error: use of undeclared variable 'y'"


def test_json_diagnostics(tmp_path: Path, capsys):
	src = _write_src(tmp_path, "i32 x\n")
	assert main([str(src), "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 1
	[diag] = payload["diagnostics"]
	assert diag["phase"] == "parser"
	assert diag["severity"] == "error"
	assert diag["file"] == str(src)


def test_json_success(tmp_path: Path, capsys):
	src = _write_src(tmp_path)
	assert main([str(src), "--json"]) == 0
	assert json.loads(capsys.readouterr().out) == {"exit_code": 0, "diagnostics": []}


def test_missing_source_file(tmp_path: Path, capsys):
	missing = tmp_path / "nope.llg"
	assert main([str(missing), "--json"]) == 1
	[diag] = json.loads(capsys.readouterr().out)["diagnostics"]
	assert diag["phase"] == "driver"
	assert diag["message"].startswith("cannot read source")


def test_verify_flag(tmp_path: Path, capsys):
	pytest.importorskip("llvmlite")
	src = _write_src(tmp_path)
	assert main([str(src), "--verify", "--emit-ir", str(tmp_path / "prog.ll")]) == 0
	assert capsys.readouterr().err == ""


def test_link_and_run(tmp_path: Path):
	if find_clang() is None:
		pytest.skip("clang not available")
	src = _write_src(tmp_path)
	exe = tmp_path / "prog"
	assert main([str(src), "-o", str(exe)]) == 0
	assert (tmp_path / "prog.ll").exists()
	run = subprocess.run([str(exe)], input="20\n", capture_output=True, text=True)
	assert run.returncode == 0
	assert run.stdout == "x=41"


def test_link_without_clang(tmp_path: Path, capsys, monkeypatch):
	monkeypatch.setattr("llgen.driver.find_clang", lambda: None)
	src = _write_src(tmp_path)
	assert main([str(src), "-o", str(tmp_path / "prog")]) == 1
	assert "clang not available" in capsys.readouterr().err
