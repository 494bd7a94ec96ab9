"""Typed exception hierarchy for formula registration and invocation."""

from coda_pages.coda_client.errors import PackError


class FormulaError(PackError):
    """Base exception for all formula errors."""
    pass


class FormulaNotFoundError(FormulaError):
    """Raised when invoking a formula that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown formula: {name}")
        self.name = name


class FormulaRegistrationError(FormulaError):
    """Raised when a formula definition is invalid or its name is taken."""

    def __init__(self, message: str):
        super().__init__(message)


class FormulaArgumentError(FormulaError):
    """Raised when a formula is invoked with the wrong arguments."""

    def __init__(self, formula: str, message: str):
        super().__init__(f"{formula}: {message}")
        self.formula = formula
