"""
Exception hierarchy for code generation.

Everything raised by the resolver, the registries and the emitters derives
from GeneratorError so callers can catch one type at the run boundary.
"""

from typing import Optional


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class DomainError(GeneratorError):
    """Raised when the domain document is structurally invalid."""

    pass


class ClassNotFoundError(DomainError):
    """Raised when a class name required for a declaration cannot be resolved."""

    def __init__(self, class_name: str, context: Optional[str] = None):
        self.class_name = class_name
        self.context = context
        message = f"Class not found: {class_name}"
        if context:
            message += f" ({context})"
        super().__init__(message)


class NotAnEnumError(DomainError):
    """Raised when an enum-only query is made against a non-enum class."""

    def __init__(self, class_name: str):
        self.class_name = class_name
        super().__init__(f"Class '{class_name}' is not an ENUM class")


class DuplicateClassError(DomainError):
    """Raised when two classes share the same name anywhere in the tree."""

    def __init__(self, class_name: str, first_package: str, second_package: str):
        self.class_name = class_name
        self.packages = (first_package, second_package)
        super().__init__(
            f"Duplicate class name '{class_name}' in packages "
            f"'{first_package}' and '{second_package}'"
        )
