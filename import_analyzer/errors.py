"""
Exception hierarchy for the import analyzer.

Unresolvable specifiers are not errors and never raise; everything here
signals a condition that should stop the current run.
"""

from typing import Optional


class ImportAnalyzerError(Exception):
    """Base exception for all import analyzer errors."""


class ConfigError(ImportAnalyzerError):
    """A configuration value has the wrong type or shape."""


class SourceSyntaxError(ImportAnalyzerError):
    """The parser reported error nodes while reading a source file."""

    def __init__(self, filename: str, line: int, column: int):
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(f"Syntax error in {filename} at line {line}, column {column}")


class ModuleParseError(ImportAnalyzerError):
    """A module file could not be read or parsed; fatal for the whole run."""

    def __init__(self, filename: str, reason: Optional[str] = None):
        self.filename = filename
        self.reason = reason
        message = f"Error while parsing: {filename}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
