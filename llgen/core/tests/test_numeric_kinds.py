# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
NumericKind table: spellings, sizes, classification and formats.
"""

from __future__ import annotations

import pytest

from llgen.codegen.llvm.errors import UnknownTypeError
from llgen.core.numeric_kinds import WIDEST_FLOAT, NumericKind


def test_exactly_four_kinds():
	assert [k.type_name for k in NumericKind] == ["i32", "i64", "f32", "f64"]


@pytest.mark.parametrize(
	"kind, llvm, size, fmt",
	[
		(NumericKind.I32, "i32", 4, "%d"),
		(NumericKind.I64, "i64", 8, "%ld"),
		(NumericKind.F32, "float", 4, "%f"),
		(NumericKind.F64, "double", 8, "%lf"),
	],
)
def test_kind_metadata(kind, llvm, size, fmt):
	assert kind.llvm == llvm
	assert kind.size == size
	assert kind.format == fmt


def test_classification_is_never_ambiguous():
	for kind in NumericKind:
		assert kind.is_int() != kind.is_float()
	assert {k for k in NumericKind if k.is_float()} == {NumericKind.F32, NumericKind.F64}


def test_same_class():
	assert NumericKind.I32.same_class(NumericKind.I64)
	assert NumericKind.F64.same_class(NumericKind.F32)
	assert not NumericKind.I64.same_class(NumericKind.F32)


def test_from_type_name():
	assert NumericKind.from_type_name("f32") is NumericKind.F32
	assert NumericKind.from_type_name("float") is None
	assert NumericKind.from_type_name(None) is None


def test_parse_rejects_unknown_type():
	assert NumericKind.parse("i64") is NumericKind.I64
	with pytest.raises(UnknownTypeError, match="unknown type 'u8'"):
		NumericKind.parse("u8")


def test_widest_float_is_double():
	assert WIDEST_FLOAT is NumericKind.F64
	assert max((k for k in NumericKind if k.is_float()), key=lambda k: k.size) is WIDEST_FLOAT
