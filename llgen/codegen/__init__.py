# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Code generation backends."""
