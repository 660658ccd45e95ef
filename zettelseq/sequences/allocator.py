"""Allocate the next free child, sibling or root address."""

from loguru import logger

from zettelseq.domain.sequence import Scheme, Sequence

from .codec import component_key, successor
from .collection import SequenceCollection, check_scheme, existing_sequence


def _first_component(scheme: Scheme, index: int) -> str:
    if scheme is Scheme.ALPHANUMERIC and index % 2 == 1:
        return "a"
    return "1"


def _next_component(
    collection: SequenceCollection, scheme: Scheme, parent: tuple[str, ...]
) -> str:
    """Successor of the largest component used directly under ``parent``."""
    depth = len(parent) + 1
    used = [sequence.components[-1] for sequence in collection.at_position(parent, depth)]
    if not used:
        return _first_component(scheme, depth - 1)
    return successor(max(used, key=component_key))


def new_child(target: str, collection: SequenceCollection, scheme: Scheme) -> str:
    """Return the next unused address one level below ``target``.

    Args:
        target: Existing address to add a child to
        collection: Addresses currently in use
        scheme: Active scheme

    Returns:
        ``target`` extended by the successor of its largest existing child,
        or by the first value of that level if it has no children yet

    Raises:
        MalformedSequence: If ``target`` does not parse
        UnknownSequence: If ``target`` is not in ``collection``
    """
    sequence = existing_sequence(target, collection, scheme)
    child = sequence.with_component(_next_component(collection, scheme, sequence.components))
    logger.debug(f"New child of {target}: {child.address}")
    return child.address


def new_sibling(target: str, collection: SequenceCollection, scheme: Scheme) -> str:
    """Return the next unused address on the same level as ``target``.

    The new value always follows the current maximum among the siblings;
    gaps left by deleted notes are not reused.

    Raises:
        MalformedSequence: If ``target`` does not parse
        UnknownSequence: If ``target`` is not in ``collection``
    """
    sequence = existing_sequence(target, collection, scheme)
    parent = sequence.components[:-1]
    sibling = Sequence(
        scheme=scheme, components=parent + (_next_component(collection, scheme, parent),)
    )
    logger.debug(f"New sibling of {target}: {sibling.address}")
    return sibling.address


def new_root(collection: SequenceCollection, scheme: Scheme) -> str:
    """Return the next unused top-level address, ``1`` for an empty collection."""
    check_scheme(collection, scheme)
    return _next_component(collection, scheme, ())
