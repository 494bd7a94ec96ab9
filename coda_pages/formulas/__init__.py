"""Formula registry, invocation context and dispatcher."""

from .registry import (
    Formula,
    FormulaRegistry,
    ParameterSpec,
    ParameterType,
    ResultType,
)
from .dispatcher import FormulaDispatcher
from .context import InvocationContext
from .pages import build_registry
from .errors import (
    FormulaError,
    FormulaNotFoundError,
    FormulaArgumentError,
    FormulaRegistrationError,
)

__all__ = [
    'Formula',
    'FormulaRegistry',
    'ParameterSpec',
    'ParameterType',
    'ResultType',
    'FormulaDispatcher',
    'InvocationContext',
    'build_registry',
    'FormulaError',
    'FormulaNotFoundError',
    'FormulaArgumentError',
    'FormulaRegistrationError',
]
