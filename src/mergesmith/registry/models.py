"""Data models for the placeholder registry."""

import uuid

from pydantic import BaseModel, Field

# Display colors handed out to new placeholders
LABEL_PALETTE: tuple[str, ...] = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#98D8C8",
    "#F7DC6F",
)


def _new_id() -> str:
    return uuid.uuid4().hex


class Value(BaseModel):
    """One candidate substitution for a placeholder."""

    id: str = Field(default_factory=_new_id)
    text: str = ""


class Placeholder(BaseModel):
    """A named substitution point, matched in templates as [name]."""

    id: str = Field(default_factory=_new_id)
    name: str = ""  # Used verbatim, never normalized
    label: str = LABEL_PALETTE[0]  # Display color, ignored by the merge engine
    values: list[Value] = Field(default_factory=list)

    @property
    def marker(self) -> str:
        """Template marker text for this placeholder."""
        return f"[{self.name}]"

    @property
    def display_marker(self) -> str:
        """Marker as shown to users, with a hint when the name is still empty."""
        return self.marker if self.name else "[Field Name]"

    def value_texts(self) -> list[str]:
        return [value.text for value in self.values]


class NotFoundError(Exception):
    """Raised by strict registries when a placeholder or value id is unknown."""

    pass
