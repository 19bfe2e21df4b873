# src/core/errors.py
"""
Typed errors for the calculator suite.

Exports
-------
- CalculatorError, InvalidInputError, DealNotFoundError,
  StoreCorruptedError, ExportError
- CALCULATOR_ERRORS
- require_non_negative(name, value)
- require_positive(name, value)
"""

from __future__ import annotations

# =========================
# Exception types
# =========================


class CalculatorError(RuntimeError):
    """Base class for calculator-suite failures."""


class InvalidInputError(CalculatorError, ValueError):
    """A numeric input is structurally invalid (negative principal, zero term, ...)."""


class DealNotFoundError(CalculatorError, KeyError):
    """No saved deal exists under the requested id."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable for the CLI.
        return str(self.args[0]) if self.args else "deal not found"


class StoreCorruptedError(CalculatorError):
    """The deal store file exists but does not hold a JSON array of deals."""


class ExportError(CalculatorError):
    """An export target could not be written."""


# Selector tuple for grouped exception handling
CALCULATOR_ERRORS = (
    InvalidInputError,
    DealNotFoundError,
    StoreCorruptedError,
    ExportError,
)

# =========================
# Guards
# =========================


def require_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise InvalidInputError(f"{name} must be >= 0 (got {value!r})")


def require_positive(name: str, value: float) -> None:
    if value <= 0:
        raise InvalidInputError(f"{name} must be > 0 (got {value!r})")


__all__ = [
    "CalculatorError",
    "InvalidInputError",
    "DealNotFoundError",
    "StoreCorruptedError",
    "ExportError",
    "CALCULATOR_ERRORS",
    "require_non_negative",
    "require_positive",
]
