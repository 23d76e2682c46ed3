"""Ordered, id-addressed store of placeholders and their values."""

import logging
import random
from typing import Iterable, Iterator, Optional, Union

from .models import LABEL_PALETTE, NotFoundError, Placeholder, Value

logger = logging.getLogger(__name__)


class PlaceholderRegistry:
    """
    Holds the placeholders of one editing session.

    Placeholders keep their insertion order and each one keeps its values in
    the order they were appended. Mutations address placeholders and values by
    id. Unknown ids are ignored (the call returns None) unless the registry is
    strict, in which case NotFoundError is raised.
    """

    def __init__(self, strict: bool = False, rng: Optional[random.Random] = None):
        """
        Initialize an empty registry.

        Args:
            strict: Raise NotFoundError for unknown ids instead of ignoring them
            rng: Random source for display labels (created if not provided)
        """
        self.strict = strict
        self._rng = rng or random.Random()
        self._placeholders: list[Placeholder] = []

    @classmethod
    def from_mapping(
        cls,
        mapping: Union[dict[str, Iterable[str]], Iterable[tuple[str, Iterable[str]]]],
        strict: bool = False,
    ) -> "PlaceholderRegistry":
        """
        Build a registry from name -> values pairs.

        Args:
            mapping: A dict or an iterable of (name, values) pairs
            strict: Passed through to the new registry

        Returns:
            A registry with one placeholder per pair, in iteration order
        """
        registry = cls(strict=strict)
        items = mapping.items() if isinstance(mapping, dict) else mapping
        for name, texts in items:
            placeholder = registry.add_placeholder()
            registry.rename_placeholder(placeholder.id, name)
            for text in texts:
                value = registry.add_value(placeholder.id)
                registry.update_value(placeholder.id, value.id, text)
        return registry

    # -------------------------
    # Read access
    # -------------------------

    @property
    def placeholders(self) -> list[Placeholder]:
        return list(self._placeholders)

    def __iter__(self) -> Iterator[Placeholder]:
        return iter(list(self._placeholders))

    def __len__(self) -> int:
        return len(self._placeholders)

    def get(self, placeholder_id: str) -> Optional[Placeholder]:
        for placeholder in self._placeholders:
            if placeholder.id == placeholder_id:
                return placeholder
        return None

    def to_mapping(self) -> list[tuple[str, list[str]]]:
        """Return (name, value texts) pairs in registry order."""
        return [(p.name, p.value_texts()) for p in self._placeholders]

    # -------------------------
    # Placeholder mutations
    # -------------------------

    def add_placeholder(self) -> Placeholder:
        """Create an unnamed placeholder with no values and append it."""
        placeholder = Placeholder(label=self._rng.choice(LABEL_PALETTE))
        self._placeholders.append(placeholder)
        logger.debug(f"Added placeholder {placeholder.id} (label {placeholder.label})")
        return placeholder

    def rename_placeholder(self, placeholder_id: str, new_name: str) -> Optional[Placeholder]:
        """Set a placeholder's name. Empty and duplicate names are accepted."""
        placeholder = self._require(placeholder_id)
        if placeholder is None:
            return None
        placeholder.name = new_name
        return placeholder

    def remove_placeholder(self, placeholder_id: str) -> Optional[Placeholder]:
        placeholder = self._require(placeholder_id)
        if placeholder is None:
            return None
        self._placeholders.remove(placeholder)
        logger.debug(f"Removed placeholder {placeholder_id}")
        return placeholder

    # -------------------------
    # Value mutations
    # -------------------------

    def add_value(self, placeholder_id: str) -> Optional[Value]:
        """Append an empty value to a placeholder."""
        placeholder = self._require(placeholder_id)
        if placeholder is None:
            return None
        value = Value()
        placeholder.values.append(value)
        return value

    def update_value(self, placeholder_id: str, value_id: str, text: str) -> Optional[Value]:
        value = self._require_value(placeholder_id, value_id)
        if value is None:
            return None
        value.text = text
        return value

    def remove_value(self, placeholder_id: str, value_id: str) -> Optional[Value]:
        """
        Remove a value from a placeholder.

        Later values move up one position, so they land on the previous row
        the next time documents are generated.
        """
        value = self._require_value(placeholder_id, value_id)
        if value is None:
            return None
        self.get(placeholder_id).values.remove(value)
        return value

    # -------------------------
    # Lookup helpers
    # -------------------------

    def _require(self, placeholder_id: str) -> Optional[Placeholder]:
        placeholder = self.get(placeholder_id)
        if placeholder is None:
            if self.strict:
                raise NotFoundError(f"Placeholder not found: {placeholder_id}")
            logger.debug(f"Ignoring mutation of unknown placeholder {placeholder_id}")
        return placeholder

    def _require_value(self, placeholder_id: str, value_id: str) -> Optional[Value]:
        placeholder = self._require(placeholder_id)
        if placeholder is None:
            return None
        for value in placeholder.values:
            if value.id == value_id:
                return value
        if self.strict:
            raise NotFoundError(f"Value {value_id} not found in placeholder {placeholder_id}")
        logger.debug(f"Ignoring mutation of unknown value {value_id}")
        return None
