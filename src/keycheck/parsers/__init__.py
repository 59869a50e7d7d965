"""Lexical parsers for scanned source files."""

from .source import Argument, Scope, SourceDocument, StringLiteral

__all__ = ["Argument", "Scope", "SourceDocument", "StringLiteral"]
