"""Mail-merge engine: batch sizing and per-row placeholder substitution."""

import logging
import re
from collections import Counter
from typing import Iterable

from ..registry import Placeholder
from .models import MergeResult, Readiness, ResolvedDocument, ValidationError
from .syntax import build_marker_pattern, fallback_marker, find_markers

logger = logging.getLogger(__name__)

MISSING_TEMPLATE_MESSAGE = "Please add email template and at least one field with values!"
MISSING_VALUES_MESSAGE = "Please add values to at least one field!"


class MergeEngine:
    """
    Turns a template and a set of placeholders into resolved documents.

    Values line up by position: row i takes the i-th value of every
    placeholder. The batch is as long as the placeholder with the most values;
    a placeholder that runs out of values renders back as its bracketed marker.
    Placeholders with no values at all do not shrink the batch.

    The engine holds no state between calls, so generate can be called again
    after any edit and simply recomputes everything.
    """

    def __init__(
        self,
        escape_names: bool = True,
        document_name_prefix: str = "Email",
        fallback_label: str = "Field",
    ):
        """
        Initialize the merge engine.

        Args:
            escape_names: Match placeholder names literally (False builds the
                marker pattern from the raw name)
            document_name_prefix: Prefix for document display names
            fallback_label: Marker label for unnamed placeholders without a value
        """
        self.escape_names = escape_names
        self.document_name_prefix = document_name_prefix
        self.fallback_label = fallback_label

    @classmethod
    def from_settings(cls, settings=None) -> "MergeEngine":
        """Create an engine configured from application settings."""
        if settings is None:
            from ..config import settings
        return cls(
            escape_names=settings.escape_placeholder_names,
            document_name_prefix=settings.document_name_prefix,
            fallback_label=settings.fallback_field_label,
        )

    def preview_count(self, registry: Iterable[Placeholder]) -> int:
        """
        Number of documents generate would produce.

        Args:
            registry: The placeholders to merge

        Returns:
            The largest value count among placeholders that have values, or 0
        """
        counts = [len(p.values) for p in registry if p.values]
        return max(counts) if counts else 0

    def readiness(self, template: str, registry: Iterable[Placeholder]) -> Readiness:
        """
        Check whether generation can run and say what is missing if not.

        Args:
            template: The template text
            registry: The placeholders to merge

        Returns:
            Readiness with the document count and a hint when not ready
        """
        placeholders = list(registry)
        count = self.preview_count(placeholders)

        hint = None
        if not template:
            hint = "Write your email first"
        elif not placeholders:
            hint = "Add at least one field"
        elif count == 0:
            hint = "Add values to your fields"

        return Readiness(ready=hint is None, count=count, hint=hint)

    def generate(self, template: str, registry: Iterable[Placeholder]) -> list[ResolvedDocument]:
        """
        Generate one resolved document per row.

        For every row each placeholder's [name] markers are replaced by the
        value at that row, in registry order. A value's text is inserted
        literally. Substituted text is scanned again by every later
        placeholder in registry order, so a value or a fallback marker that
        contains a later placeholder's marker gets that marker replaced too.
        For duplicate names this means that on each row the first duplicate
        with a value wins; when it has none, its [name] fallback is filled by
        the next duplicate.

        Args:
            template: The template text
            registry: The placeholders to merge

        Returns:
            Documents ordered by row, ids starting at 0

        Raises:
            ValidationError: If the template is empty, there are no
                placeholders, or no placeholder has a value
        """
        placeholders = list(registry)

        if not template or not placeholders:
            raise ValidationError(MISSING_TEMPLATE_MESSAGE)

        count = self.preview_count(placeholders)
        if count == 0:
            raise ValidationError(MISSING_VALUES_MESSAGE)

        patterns = [(p, self._compile(p)) for p in placeholders]
        self._log_template_coverage(template, placeholders)

        documents = []
        for row in range(count):
            content = template
            for placeholder, pattern in patterns:
                replacement = self._value_for_row(placeholder, row)
                content = pattern.sub(lambda _match, text=replacement: text, content)

            documents.append(
                ResolvedDocument(
                    id=row,
                    name=f"{self.document_name_prefix} {row + 1}",
                    content=content,
                )
            )

        logger.info(f"Generated {len(documents)} documents from {len(placeholders)} placeholders")
        return documents

    def merge(self, template: str, registry: Iterable[Placeholder]) -> MergeResult:
        """Generate documents and bundle them with their count."""
        documents = self.generate(template, registry)
        return MergeResult(documents=documents, count=len(documents))

    def _value_for_row(self, placeholder: Placeholder, row: int) -> str:
        # An empty string is a real value, only a missing position falls back
        if row < len(placeholder.values):
            return placeholder.values[row].text
        return fallback_marker(placeholder.name, self.fallback_label)

    def _compile(self, placeholder: Placeholder) -> re.Pattern:
        try:
            return build_marker_pattern(placeholder.name, escape=self.escape_names)
        except re.error as e:
            logger.warning(f"Placeholder name {placeholder.name!r} is not a valid pattern: {e}")
            raise ValidationError(
                f"Field name '{placeholder.name}' cannot be used as a pattern: {e}"
            ) from e

    def _log_template_coverage(self, template: str, placeholders: list[Placeholder]) -> None:
        duplicates = [
            name for name, seen in Counter(p.name for p in placeholders).items() if seen > 1
        ]
        for name in duplicates:
            logger.warning(f"Duplicate field name {name!r}: on each row the first one with a value fills its markers")

        if logger.isEnabledFor(logging.DEBUG):
            known = {p.name for p in placeholders}
            unmatched = [m for m in find_markers(template) if m not in known]
            if unmatched:
                logger.debug(f"Template markers without a field: {unmatched}")
