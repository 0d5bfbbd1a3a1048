# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
llgen command line driver.

source -> lark parse -> LlvmBuilder -> IR text
       -> (--verify) llvmlite parse + verify
       -> (-o) clang link into an executable

Without `--emit-ir` or `-o` the IR is written to stdout.
"""

from __future__ import annotations

import argparse
import json
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from llgen.codegen.llvm.toolchain import find_clang
from llgen.core.diagnostics import Diagnostic
from llgen.frontend import compile_source


def _build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="llgen", description="Compile llgen source to LLVM IR")
	parser.add_argument("source", type=Path, help="Path to an llgen source file")
	parser.add_argument("-o", "--output", type=Path, help="Link an executable at this path (requires clang)")
	parser.add_argument("--emit-ir", type=Path, help="Write LLVM IR to the given path")
	parser.add_argument("--verify", action="store_true", help="Verify the emitted IR with llvmlite")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/file/line/column)",
	)
	return parser


def _report(diagnostics: List[Diagnostic], source_path: Path, as_json: bool, exit_code: int) -> int:
	file = str(source_path)
	if as_json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [d.to_dict(file) for d in diagnostics]}))
	else:
		for d in diagnostics:
			print(d.format_human(file), file=sys.stderr)
	return exit_code


def _fail(phase: str, message: str, source_path: Path, as_json: bool) -> int:
	diag = Diagnostic(message=message, phase=phase, severity="error")
	return _report([diag], source_path, as_json, 1)


def main(argv: Optional[List[str]] = None) -> int:
	"""
	Compile one source file. Returns the process exit code (0 ok, 1 on errors).

	With --json, prints `{"exit_code": ..., "diagnostics": [...]}` on stdout;
	otherwise prints human-readable diagnostics to stderr.
	"""
	args = _build_parser().parse_args(argv)
	source_path: Path = args.source

	try:
		source = source_path.read_text()
	except OSError as err:
		return _fail("driver", f"cannot read source: {err.strerror or err}", source_path, args.json)

	result = compile_source(source, file=str(source_path))
	if result.ir is None:
		return _report(result.diagnostics, source_path, args.json, 1)
	ir = result.ir

	if args.verify:
		from llgen.codegen.llvm.verify import verify_ir

		errors = verify_ir(ir)
		if errors:
			diags = [Diagnostic(message=msg, phase="verify", severity="error") for msg in errors]
			return _report(diags, source_path, args.json, 1)

	if args.emit_ir is not None:
		args.emit_ir.parent.mkdir(parents=True, exist_ok=True)
		args.emit_ir.write_text(ir)

	if args.output is not None:
		code = _link(ir, args.output, source_path, args.json)
		if code != 0:
			return code
	elif args.emit_ir is None and not args.json:
		sys.stdout.write(ir)

	return _report(result.diagnostics, source_path, args.json, 0)


def _link(ir: str, output: Path, source_path: Path, as_json: bool) -> int:
	clang = find_clang()
	if clang is None:
		return _fail("link", "clang not available for code generation", source_path, as_json)

	output.parent.mkdir(parents=True, exist_ok=True)
	ir_path = output.with_suffix(".ll")
	ir_path.write_text(ir)
	link_res = subprocess.run(
		[clang, "-x", "ir", str(ir_path), "-o", str(output)],
		capture_output=True,
		text=True,
	)
	if link_res.returncode != 0:
		return _fail("link", f"clang failed: {link_res.stderr.strip()}", source_path, as_json)
	return 0


if __name__ == "__main__":
	sys.exit(main())
