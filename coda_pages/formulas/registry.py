"""Formula definitions and the registry that holds them.

A registry is an ordinary object built at startup and handed to the
dispatcher; nothing is registered as an import side effect.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from .errors import FormulaNotFoundError, FormulaRegistrationError


class ParameterType(Enum):
    """Value types accepted by formula parameters."""

    STRING = "string"
    NUMBER = "number"
    IMAGE = "image"


class ResultType(Enum):
    """Value types returned by formulas."""

    STRING = "string"
    ARRAY = "array"


@dataclass
class ParameterSpec:
    """One positional formula parameter.

    Attributes:
        name: Parameter name
        type: Value type
        description: Help text
        optional: Whether the parameter may be omitted
        autocomplete: Name of the autocomplete provider ("pages", "icons")
    """
    name: str
    type: ParameterType
    description: str
    optional: bool = False
    autocomplete: Optional[str] = None


@dataclass
class Formula:
    """A callable unit: ordered parameters in, one value out.

    ``execute`` is called as ``execute(args, context)`` with one argument per
    parameter; omitted optional arguments arrive as ``UNSET``.
    """
    name: str
    description: str
    parameters: List[ParameterSpec]
    result_type: ResultType
    execute: Callable[[List[Any], Any], Any]
    is_action: bool = False
    cache_ttl_secs: int = 0

    @property
    def required_count(self) -> int:
        return sum(1 for p in self.parameters if not p.optional)

    def parameter(self, name: str) -> ParameterSpec:
        for param in self.parameters:
            if param.name == name:
                return param
        raise KeyError(f"{self.name} has no parameter {name!r}")


@dataclass
class FormulaRegistry:
    """Formulas by name, in registration order."""

    _formulas: Dict[str, Formula] = field(default_factory=dict)

    def register(self, formula: Formula) -> Formula:
        """Add a formula.

        Raises:
            FormulaRegistrationError: If the name is taken or a required
                parameter follows an optional one
        """
        if formula.name in self._formulas:
            raise FormulaRegistrationError(f"Formula {formula.name} is already registered")

        seen_optional = False
        for param in formula.parameters:
            if param.optional:
                seen_optional = True
            elif seen_optional:
                raise FormulaRegistrationError(
                    f"{formula.name}: required parameter {param.name!r} follows an optional one"
                )

        self._formulas[formula.name] = formula
        return formula

    def get(self, name: str) -> Formula:
        try:
            return self._formulas[name]
        except KeyError:
            raise FormulaNotFoundError(name)

    def names(self) -> List[str]:
        return list(self._formulas)

    def __contains__(self, name: str) -> bool:
        return name in self._formulas

    def __iter__(self) -> Iterator[Formula]:
        return iter(self._formulas.values())

    def __len__(self) -> int:
        return len(self._formulas)
