"""
Naming utilities for safe code generation.

Handles case conversions for file and member names, and keeps generated
parameter names clear of target-language reserved words.
"""

import re
from enum import Enum
from typing import Dict, Optional, Set


class NamingCase(Enum):
    """Different naming case styles."""

    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name
    PRESERVE = "preserve"  # as declared


def first_upper(name: str) -> str:
    """Upper-case the first character only (``userName`` -> ``UserName``)."""
    return name[:1].upper() + name[1:]


def first_lower(name: str) -> str:
    """Lower-case the first character only (``UserName`` -> ``userName``)."""
    return name[:1].lower() + name[1:]


def kebab_case(name: str) -> str:
    """Hyphenate at lower-to-upper boundaries and lower-case (``PetOwner`` -> ``pet-owner``)."""
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", name).lower()


class NameSanitizer:
    """Handles case conversion and reserved word conflicts."""

    def __init__(self, reserved_words: Optional[Set[str]] = None, suffix: str = "_"):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            suffix: Suffix appended to names clashing with a reserved word
        """
        self.reserved_words = reserved_words or set()
        self.suffix = suffix
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(
        self, name: str, target_case: NamingCase = NamingCase.PRESERVE
    ) -> str:
        """
        Convert a name to the target case and resolve reserved word clashes.

        The result depends on the input only, so repeated runs produce
        identical output.

        Args:
            name: Original name
            target_case: Desired case style

        Returns:
            Name safe for use in the target language
        """
        cache_key = f"{name}_{target_case.value}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        converted = self._convert_case(name, target_case)
        if converted in self.reserved_words:
            converted = f"{converted}{self.suffix}"

        self._name_cache[cache_key] = converted
        return converted

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        if target_case == NamingCase.CAMEL_CASE:
            return first_lower(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return first_upper(name)
        elif target_case == NamingCase.KEBAB_CASE:
            return kebab_case(name)
        return name

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words
