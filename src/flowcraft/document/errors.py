# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions raised while reading or addressing pipeline documents."""

from __future__ import annotations


class DocumentParseError(ValueError):
    """Raised when pipeline text cannot be parsed into a document tree."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
        """Initialise the error with an optional source location.

        Args:
            message: Description of the parser failure.
            line: 1-based line number of the failure when known.
            column: 1-based column number of the failure when known.
        """

        self.message = message
        self.line = line
        self.column = column
        super().__init__(self._render())

    def _render(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"line {self.line}: {self.message}"
        return f"line {self.line}, column {self.column}: {self.message}"


class StructuralConflictError(Exception):
    """Raised when a dotted path crosses a node that is not a mapping."""

    def __init__(self, path: str, segment: str, found: str) -> None:
        """Initialise the error with the offending location.

        Args:
            path: Full dotted path being resolved.
            segment: Path prefix whose node is not a mapping.
            found: Human-readable kind of the blocking node.
        """

        self.path = path
        self.segment = segment
        self.found = found
        super().__init__(f"cannot traverse '{segment}' while resolving '{path}': expected a mapping, found {found}")


__all__ = ["DocumentParseError", "StructuralConflictError"]
