"""Unit tests for formulas.registry module."""

import pytest

from coda_pages.formulas.errors import FormulaNotFoundError, FormulaRegistrationError
from coda_pages.formulas.pages import build_registry
from coda_pages.formulas.registry import (
    Formula,
    FormulaRegistry,
    ParameterSpec,
    ParameterType,
    ResultType,
)


def make_formula(name="Echo", parameters=None):
    return Formula(
        name=name,
        description="Echo its arguments",
        parameters=parameters if parameters is not None else [
            ParameterSpec("text", ParameterType.STRING, "Text"),
        ],
        result_type=ResultType.STRING,
        execute=lambda args, context: args,
    )


class TestFormulaRegistry:
    """Test cases for FormulaRegistry."""

    def test_register_and_get(self):
        """Registered formulas can be looked up by name."""
        registry = FormulaRegistry()
        formula = registry.register(make_formula())

        assert registry.get("Echo") is formula
        assert "Echo" in registry
        assert len(registry) == 1

    def test_unknown_formula(self):
        """Looking up an unknown name raises FormulaNotFoundError."""
        with pytest.raises(FormulaNotFoundError, match="Nope"):
            FormulaRegistry().get("Nope")

    def test_duplicate_name_rejected(self):
        """A name can only be registered once."""
        registry = FormulaRegistry()
        registry.register(make_formula())

        with pytest.raises(FormulaRegistrationError, match="already registered"):
            registry.register(make_formula())

    def test_required_after_optional_rejected(self):
        """Required parameters must come before optional ones."""
        params = [
            ParameterSpec("a", ParameterType.STRING, "A", optional=True),
            ParameterSpec("b", ParameterType.STRING, "B"),
        ]
        with pytest.raises(FormulaRegistrationError, match="follows an optional"):
            FormulaRegistry().register(make_formula(parameters=params))

    def test_registries_are_independent(self):
        """Registries do not share state."""
        first = FormulaRegistry()
        first.register(make_formula())

        assert "Echo" not in FormulaRegistry()

    def test_iteration_keeps_registration_order(self):
        """Formulas iterate in the order they were registered."""
        registry = FormulaRegistry()
        registry.register(make_formula("B"))
        registry.register(make_formula("A"))

        assert [f.name for f in registry] == ["B", "A"]
        assert registry.names() == ["B", "A"]


class TestFormula:
    """Test cases for Formula helpers."""

    def test_parameter_lookup(self):
        """parameter() finds a parameter by name."""
        assert make_formula().parameter("text").type is ParameterType.STRING

    def test_unknown_parameter(self):
        """parameter() raises KeyError for unknown names."""
        with pytest.raises(KeyError):
            make_formula().parameter("other")


class TestPageRegistry:
    """Test cases for the page formula definitions."""

    def test_page_formulas_registered(self):
        """The page formulas are registered in a fixed order."""
        assert build_registry().names() == ["ListPages", "AddPage", "RenamePage", "CopyPage"]

    def test_list_pages_is_a_fresh_formula(self):
        """ListPages is a read formula that is never cached."""
        formula = build_registry().get("ListPages")

        assert not formula.is_action
        assert formula.cache_ttl_secs == 0
        assert formula.result_type is ResultType.ARRAY
        assert formula.required_count == 0

    def test_actions(self):
        """AddPage, RenamePage and CopyPage are actions returning a page ID."""
        registry = build_registry()
        for name in ("AddPage", "RenamePage", "CopyPage"):
            formula = registry.get(name)
            assert formula.is_action
            assert formula.result_type is ResultType.STRING

    def test_parameter_shapes(self):
        """Parameter order and required counts match each formula."""
        registry = build_registry()

        add = registry.get("AddPage")
        assert [p.name for p in add.parameters] == [
            "name", "parent", "subtitle", "iconName", "coverImage", "content",
        ]
        assert add.required_count == 0
        assert add.parameter("coverImage").type is ParameterType.IMAGE

        rename = registry.get("RenamePage")
        assert [p.name for p in rename.parameters][0] == "pageIdOrName"
        assert rename.required_count == 1

        copy = registry.get("CopyPage")
        assert [p.name for p in copy.parameters] == ["sourcePageIdOrName", "newName", "parentPageId"]
        assert copy.required_count == 2

    def test_autocomplete_providers(self):
        """Page and icon parameters offer autocomplete."""
        registry = build_registry()

        assert registry.get("AddPage").parameter("parent").autocomplete == "pages"
        assert registry.get("AddPage").parameter("iconName").autocomplete == "icons"
        assert registry.get("RenamePage").parameter("pageIdOrName").autocomplete == "pages"
        assert registry.get("CopyPage").parameter("sourcePageIdOrName").autocomplete == "pages"
