"""Render policy documents written in a compact Markdown dialect to HTML."""

from policy_markdown.compiler import compile_markdown

__version__ = "0.1.0"

__all__ = ["__version__", "compile_markdown"]
