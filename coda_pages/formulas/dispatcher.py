"""Formula invocation and autocomplete dispatch."""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from coda_pages.page_operations.models import UNSET, AutocompleteOption
from .errors import FormulaArgumentError
from .registry import FormulaRegistry

logger = logging.getLogger(__name__)

AutocompleteProvider = Callable[[Any, str], List[AutocompleteOption]]

DEFAULT_AUTOCOMPLETE_PROVIDERS: Dict[str, AutocompleteProvider] = {
    "pages": lambda context, query: context.page_search().search(query),
    "icons": lambda context, query: context.icon_search().search(query),
}


class FormulaDispatcher:
    """Invokes formulas from a registry with positional arguments.

    Example:
        >>> dispatcher = FormulaDispatcher(build_registry())
        >>> dispatcher.invoke("CopyPage", ["canvas-abc", "Copy"], context)
        'canvas-xyz'
    """

    def __init__(
        self,
        registry: FormulaRegistry,
        autocomplete_providers: Optional[Dict[str, AutocompleteProvider]] = None,
    ):
        self.registry = registry
        self.autocomplete_providers = dict(
            DEFAULT_AUTOCOMPLETE_PROVIDERS if autocomplete_providers is None else autocomplete_providers
        )

    def _normalize_args(self, formula, args: Sequence[Any]) -> List[Any]:
        """Pad omitted optional arguments with UNSET and check required ones."""
        params = formula.parameters
        if len(args) > len(params):
            raise FormulaArgumentError(
                formula.name,
                f"expected at most {len(params)} argument(s), got {len(args)}"
            )
        if len(args) < formula.required_count:
            raise FormulaArgumentError(
                formula.name,
                f"expected at least {formula.required_count} argument(s), got {len(args)}"
            )

        normalized = []
        for index, param in enumerate(params):
            value = args[index] if index < len(args) else UNSET
            if value is None:
                value = UNSET
            if value is UNSET and not param.optional:
                raise FormulaArgumentError(formula.name, f"missing required argument {param.name!r}")
            normalized.append(value)
        return normalized

    def invoke(self, name: str, args: Sequence[Any], context) -> Any:
        """Run a formula.

        Raises:
            FormulaNotFoundError: If ``name`` is not registered
            FormulaArgumentError: If arguments do not match the parameters
        """
        formula = self.registry.get(name)
        normalized = self._normalize_args(formula, args)
        logger.debug(f"Invoking {name} with {len(args)} argument(s)")
        result = formula.execute(normalized, context)
        logger.info(f"{name} completed")
        return result

    def autocomplete(self, name: str, parameter: str, query: str, context) -> List[AutocompleteOption]:
        """Suggestions for one parameter of a formula while its value is typed.

        Raises:
            FormulaNotFoundError: If ``name`` is not registered
            FormulaArgumentError: If the parameter has no autocomplete
        """
        formula = self.registry.get(name)
        try:
            param = formula.parameter(parameter)
        except KeyError as e:
            raise FormulaArgumentError(name, e.args[0])
        if not param.autocomplete:
            raise FormulaArgumentError(name, f"parameter {parameter!r} has no autocomplete")
        provider = self.autocomplete_providers.get(param.autocomplete)
        if provider is None:
            raise FormulaArgumentError(name, f"unknown autocomplete provider {param.autocomplete!r}")
        return provider(context, query or "")
