"""
Error Reporting

Every failure the formatter can raise is a contract violation by the
upstream analyzer: trees and declaration metadata are trusted, so nothing
here is recoverable. A module that raises produces no registration call.

Inputs are ESTree JSON without source text, so diagnostics point at a
location and carry no source snippet.
"""

import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from .source_location import SourceLocation


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("SYSREG_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return sys.stderr.isatty()

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """A reported diagnostic."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None


def _format_diagnostic(error: Error, color: bool = False) -> str:
    """
    Render a single diagnostic in rustc style.

    Example output (plain, no color)::

        error[E0101]: unexpected export style, found a declaration of type: ExpressionStatement
         --> lib/a.js:3:1
    """
    code_str = f"[{error.code}]" if error.code else ""
    where = str(error.location) if error.location is not None else "<unknown location>"
    return (
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
        + "\n"
        + _style(" --> ", _BOLD, _BLUE, color=color) + where
    )


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """Collects errors across a build and renders them rustc-style."""

    def __init__(self):
        self.errors: List[Error] = []

    def report_error(self, message: str, location: Optional[SourceLocation], code: Optional[str] = None) -> None:
        self.errors.append(Error(message, location, code))

    def report_exception(self, exc: "SysregError") -> None:
        self.report_error(exc.message, exc.location, code=exc.error_code)

    def format_error(self, error: Error, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        parts = [self.format_error(e, color=use_color) for e in self.errors]
        count = len(self.errors)
        summary = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0


# ============================================================================
# Exception Classes
# ============================================================================

class SysregError(Exception):
    """Base exception for all formatter errors"""
    error_code = "E0001"

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"error[{self.error_code}]: {self.message}\n --> {self.location}"
        return f"error[{self.error_code}]: {self.message}"


class FormatterContractError(SysregError):
    """
    The syntax tree or declaration metadata handed to the formatter is
    inconsistent. Raised immediately; formatting of the module is aborted.
    """


class UnexpectedExportError(FormatterContractError):
    """Export statement wraps a declaration kind the grammar never produces."""
    error_code = "E0101"


class MissingSpecifierError(FormatterContractError):
    """A name listed in a declaration collection has no specifier record."""
    error_code = "E0102"


class MissingDependencyError(FormatterContractError):
    """A dependency module is listed but no specifier cites it as its source."""
    error_code = "E0103"


class DuplicateModuleIdError(FormatterContractError):
    """Two modules in one table were assigned the same identifier."""
    error_code = "E0104"


class DuplicateBindingError(FormatterContractError):
    """A declaration collection lists the same binding name twice."""
    error_code = "E0105"


class UnresolvedModuleError(SysregError):
    """An authored dependency path does not resolve to a known module."""
    error_code = "E0201"


class SerializationError(SysregError):
    """Malformed ESTree input."""
    error_code = "E0301"
