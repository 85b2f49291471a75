"""Compile, run and check small Rust exercises, with watch mode and progress tracking."""

__version__ = "5.2.1"