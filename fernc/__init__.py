"""Compiler front end for the Fern language: lexer, parser, diagnostics and formatter."""

__version__ = "0.1.0"