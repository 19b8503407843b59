"""Interfaces for parsing JavaScript source code."""

from .js_parser import SOURCE_TYPES, ParseError, ParseResult, hash_source, parse_js

__all__ = ["ParseError", "ParseResult", "SOURCE_TYPES", "hash_source", "parse_js"]
