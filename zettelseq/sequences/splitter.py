"""Parse address strings into sequences."""

import re
from typing import Iterable

from zettelseq.domain.errors import MalformedSequence
from zettelseq.domain.sequence import NUMERIC_SEPARATOR, Scheme, Sequence

_DIGITS_PATTERN = re.compile(r"[0-9]+")
_ALPHANUMERIC_PATTERN = re.compile(r"[0-9]+(?:[a-z]+[0-9]+)*(?:[a-z]+)?")
_RUN_PATTERN = re.compile(r"[0-9]+|[a-z]+")


def split(scheme: Scheme, address: str) -> Sequence:
    """Split an address into its components.

    Args:
        scheme: Scheme whose grammar the address must follow
        address: Address string without any file-name delimiters

    Returns:
        The parsed sequence

    Raises:
        MalformedSequence: If the address does not match the grammar
    """
    if not address:
        raise MalformedSequence(address, "empty address")

    if scheme is Scheme.NUMERIC:
        components = address.split(NUMERIC_SEPARATOR)
        for component in components:
            if not component:
                raise MalformedSequence(address, "empty component")
            if not _DIGITS_PATTERN.fullmatch(component):
                raise MalformedSequence(address, f"non-digit component {component!r}")
        return Sequence(scheme=scheme, components=tuple(components))

    if not _ALPHANUMERIC_PATTERN.fullmatch(address):
        raise MalformedSequence(
            address, "expected alternating digit and lowercase letter runs starting with digits"
        )
    return Sequence(scheme=scheme, components=tuple(_RUN_PATTERN.findall(address)))


def join(scheme: Scheme, components: Iterable[str]) -> str:
    """Join components back into an address string."""
    if scheme is Scheme.NUMERIC:
        return NUMERIC_SEPARATOR.join(components)
    return "".join(components)


def is_valid(scheme: Scheme, address: str | None) -> bool:
    if not address:
        return False
    try:
        split(scheme, address)
    except MalformedSequence:
        return False
    return True
