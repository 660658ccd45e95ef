"""Build the universe of existing sequences from raw address candidates."""

from typing import Iterable, Iterator

from loguru import logger

from zettelseq.domain.errors import MalformedSequence, UnknownSequence
from zettelseq.domain.sequence import Scheme, Sequence

from .codec import component_key
from .splitter import split


def sort_key(sequence: Sequence) -> tuple[tuple[int, int | str], ...]:
    """Tree order: parents before children, siblings by component value."""
    return tuple(component_key(component) for component in sequence.components)


class SequenceCollection:
    """The set of valid sequences found among the current notes.

    Duplicates are kept as given; two notes sharing an address do not
    change which values are in use.
    """

    def __init__(self, scheme: Scheme, sequences: Iterable[Sequence] = ()):
        self.scheme = scheme
        self._sequences = list(sequences)
        self._index = {sequence.components for sequence in self._sequences}

    def __iter__(self) -> Iterator[Sequence]:
        return iter(self._sequences)

    def __len__(self) -> int:
        return len(self._sequences)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Sequence):
            return item.scheme is self.scheme and item.components in self._index
        if isinstance(item, str):
            try:
                return split(self.scheme, item).components in self._index
            except MalformedSequence:
                return False
        return False

    @property
    def addresses(self) -> list[str]:
        return [sequence.address for sequence in self._sequences]

    def sorted(self) -> list[Sequence]:
        """Unique sequences in tree order."""
        unique = {sequence.components: sequence for sequence in self._sequences}
        return sorted(unique.values(), key=sort_key)

    def roots(self) -> list[Sequence]:
        return [sequence for sequence in self.sorted() if sequence.depth == 1]

    def at_position(self, parent: tuple[str, ...], depth: int) -> list[Sequence]:
        """Sequences of exactly ``depth`` components starting with ``parent``."""
        return [
            sequence
            for sequence in self._sequences
            if sequence.depth == depth and sequence.components[: len(parent)] == parent
        ]


def build_collection(scheme: Scheme, candidates: Iterable[str | None]) -> SequenceCollection:
    """Keep every candidate that parses under ``scheme``.

    Candidates are signature substrings already extracted from file names.
    Missing or malformed candidates are skipped rather than raised, since
    most note collections contain files without an address.

    Args:
        scheme: Active scheme
        candidates: Raw address strings, ``None`` for files without one

    Returns:
        SequenceCollection of the valid sequences in input order
    """
    sequences = []
    skipped = 0
    for candidate in candidates:
        if not candidate:
            continue
        try:
            sequences.append(split(scheme, candidate))
        except MalformedSequence as e:
            skipped += 1
            logger.debug(f"Skipping candidate: {e}")

    logger.debug(f"Built collection of {len(sequences)} sequences, skipped {skipped} malformed")
    return SequenceCollection(scheme, sequences)


def check_scheme(collection: SequenceCollection, scheme: Scheme) -> None:
    if collection.scheme is not scheme:
        raise ValueError(
            f"Collection was built for the {collection.scheme.value} scheme, not {scheme.value}"
        )


def existing_sequence(target: str, collection: SequenceCollection, scheme: Scheme) -> Sequence:
    """Parse ``target`` and make sure it is present in ``collection``.

    Raises:
        ValueError: If ``collection`` was built for another scheme
        MalformedSequence: If ``target`` does not parse
        UnknownSequence: If ``target`` is not in ``collection``
    """
    check_scheme(collection, scheme)
    sequence = split(scheme, target)
    if sequence not in collection:
        raise UnknownSequence(target)
    return sequence
