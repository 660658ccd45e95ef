"""Tree queries over a sequence collection."""

from typing import Literal

from zettelseq.domain.sequence import Scheme, Sequence

from .collection import SequenceCollection, existing_sequence

Relation = Literal["parent", "all-parents", "children", "all-children", "siblings"]


def get_parent(target: str, collection: SequenceCollection, scheme: Scheme) -> str | None:
    """Address of the immediate parent, if that note exists."""
    parent = existing_sequence(target, collection, scheme).parent
    if parent is None or parent not in collection:
        return None
    return parent.address


def get_all_parents(target: str, collection: SequenceCollection, scheme: Scheme) -> list[str]:
    """Every existing ancestor of ``target``, root first."""
    sequence = existing_sequence(target, collection, scheme)
    ancestors = []
    for depth in range(1, sequence.depth):
        ancestor = Sequence(scheme=scheme, components=sequence.components[:depth])
        if ancestor in collection:
            ancestors.append(ancestor.address)
    return ancestors


def get_children(target: str, collection: SequenceCollection, scheme: Scheme) -> list[str]:
    sequence = existing_sequence(target, collection, scheme)
    return [
        child.address
        for child in collection.sorted()
        if child.depth == sequence.depth + 1 and sequence.is_prefix_of(child)
    ]


def get_all_children(target: str, collection: SequenceCollection, scheme: Scheme) -> list[str]:
    """Every descendant of ``target`` in tree order."""
    sequence = existing_sequence(target, collection, scheme)
    return [
        descendant.address
        for descendant in collection.sorted()
        if descendant.depth > sequence.depth and sequence.is_prefix_of(descendant)
    ]


def get_siblings(target: str, collection: SequenceCollection, scheme: Scheme) -> list[str]:
    sequence = existing_sequence(target, collection, scheme)
    parent = sequence.components[:-1]
    return [
        sibling.address
        for sibling in collection.sorted()
        if sibling.depth == sequence.depth
        and sibling.components[:-1] == parent
        and sibling.components != sequence.components
    ]


def get_relative(
    relation: Relation, target: str, collection: SequenceCollection, scheme: Scheme
) -> list[str]:
    """Look up relatives of ``target`` by relation name.

    Args:
        relation: One of ``parent``, ``all-parents``, ``children``,
            ``all-children`` or ``siblings``
        target: Existing address
        collection: Addresses currently in use
        scheme: Active scheme

    Returns:
        Matching addresses; a missing parent yields an empty list
    """
    if relation == "parent":
        parent = get_parent(target, collection, scheme)
        return [parent] if parent else []
    lookups = {
        "all-parents": get_all_parents,
        "children": get_children,
        "all-children": get_all_children,
        "siblings": get_siblings,
    }
    if relation not in lookups:
        raise ValueError(f"Unknown relation: {relation}")
    return lookups[relation](target, collection, scheme)
