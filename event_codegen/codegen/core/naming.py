"""
Naming utilities for safe code generation.

Handles identifier casing for event names and sanitization of
identifiers that would clash with target language keywords.
"""

import re
from typing import Set, Dict


_SEPARATORS = re.compile(r'[\W_]+')
_IDENTIFIER = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


def to_pascal_case(name: str) -> str:
    """
    Convert an event name to PascalCase.

    Only the first letter of each separated part is upper-cased, so
    internal capitals keep their word boundaries.

    Examples:
        selection -> Selection
        artChanged -> ArtChanged
        art-changed -> ArtChanged
        HTTPRequest -> HTTPRequest
        sélection -> Sélection
    """
    parts = [part for part in _SEPARATORS.split(name) if part]
    result = ''.join(part[0].upper() + part[1:] for part in parts)
    if result and result[0].isdigit():
        result = f"_{result}"
    return result


def to_type_name(name: str) -> str:
    """Name of the payload type generated for an event."""
    return f"{to_pascal_case(name)}Event"


def is_identifier(name: str) -> bool:
    """Check whether a name is usable as a C-family identifier."""
    return bool(_IDENTIFIER.match(name))


class NameSanitizer:
    """Turns wire keys into identifiers that are legal in the target language."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Original name to sanitize
            suffix_on_conflict: Suffix to add for conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        final_name = self._resolve_conflicts(cleaned, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_]', '_', name)
        cleaned = cleaned.strip('_')

        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name in self.reserved_words or name in self.builtin_types:
            name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names (and the cache that records them)."""
        self._used_names.clear()
        self._name_cache.clear()
