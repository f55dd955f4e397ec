"""Parsing collaborators feeding the declaration builders."""

from .typescript import ParsedModule, TypeDeclaration, TypeScriptSource

__all__ = ["ParsedModule", "TypeDeclaration", "TypeScriptSource"]
