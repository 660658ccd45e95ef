"""Sequence domain models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

NUMERIC_SEPARATOR = "="


class Scheme(str, Enum):
    """Numbering scheme used for note sequences.

    Attributes:
        NUMERIC: Every level is a decimal number, levels joined by ``=``
        ALPHANUMERIC: Levels alternate number and letters, starting with a
            number, with no separator between them
    """

    NUMERIC = "numeric"
    ALPHANUMERIC = "alphanumeric"

    @property
    def other(self) -> "Scheme":
        return Scheme.ALPHANUMERIC if self is Scheme.NUMERIC else Scheme.NUMERIC


class Sequence(BaseModel):
    """A parsed note address.

    Attributes:
        scheme: Scheme the address was parsed under
        components: Ordered component strings, index 0 is the root level
    """

    model_config = ConfigDict(frozen=True)

    scheme: Scheme
    components: tuple[str, ...]

    @property
    def depth(self) -> int:
        return len(self.components)

    @property
    def address(self) -> str:
        if self.scheme is Scheme.NUMERIC:
            return NUMERIC_SEPARATOR.join(self.components)
        return "".join(self.components)

    @property
    def parent(self) -> "Sequence | None":
        """The sequence one level up, or None for a root sequence."""
        if self.depth == 1:
            return None
        return Sequence(scheme=self.scheme, components=self.components[:-1])

    def is_letter_position(self, index: int) -> bool:
        """Whether the component at ``index`` is written with letters."""
        return self.scheme is Scheme.ALPHANUMERIC and index % 2 == 1

    def is_prefix_of(self, other: "Sequence") -> bool:
        return other.components[: self.depth] == self.components

    def with_component(self, component: str) -> "Sequence":
        return Sequence(scheme=self.scheme, components=self.components + (component,))

    def __str__(self) -> str:
        return self.address
