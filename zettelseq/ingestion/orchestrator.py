"""Create notes at newly allocated addresses without racing other writers."""

from datetime import datetime
from typing import Callable

from loguru import logger

from zettelseq.domain.errors import AddressClaimed, AllocationConflict
from zettelseq.domain.note import CreatedNote
from zettelseq.domain.sequence import Scheme
from zettelseq.note_store.base import NoteStore
from zettelseq.sequences import (
    SequenceCollection,
    build_collection,
    new_child,
    new_root,
    new_sibling,
)

from .filename import build_filename, make_identifier

Allocate = Callable[[SequenceCollection], str]


class NoteCreator:
    """Runs snapshot, allocate and create as one critical section.

    Allocation is a pure function of a snapshot of the store, so two writers
    working from the same snapshot compute the same address. Each attempt
    claims the address in the store, re-snapshots to confirm the allocation
    still holds, and only then writes the note. Losing any of these races
    starts a fresh attempt.
    """

    def __init__(
        self,
        *,
        store: NoteStore,
        scheme: Scheme,
        max_attempts: int = 5,
        extension: str = ".md",
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the creator.

        Args:
            store: Note store to snapshot and write to
            scheme: Active scheme
            max_attempts: Attempts before giving up with AllocationConflict
            extension: Extension of created note files
            clock: Source of the timestamp identifier
        """
        self.store = store
        self.scheme = scheme
        self.max_attempts = max_attempts
        self.extension = extension
        self.clock = clock

    def snapshot(self) -> SequenceCollection:
        return build_collection(self.scheme, self.store.signatures())

    def create_child(
        self, target: str, title: str = "", keywords: list[str] | None = None
    ) -> CreatedNote:
        return self._create(
            lambda collection: new_child(target, collection, self.scheme),
            target=target,
            title=title,
            keywords=keywords,
        )

    def create_sibling(
        self, target: str, title: str = "", keywords: list[str] | None = None
    ) -> CreatedNote:
        return self._create(
            lambda collection: new_sibling(target, collection, self.scheme),
            target=target,
            title=title,
            keywords=keywords,
        )

    def create_root(self, title: str = "", keywords: list[str] | None = None) -> CreatedNote:
        return self._create(
            lambda collection: new_root(collection, self.scheme),
            target=None,
            title=title,
            keywords=keywords,
        )

    def _create(
        self,
        allocate: Allocate,
        *,
        target: str | None,
        title: str,
        keywords: list[str] | None,
    ) -> CreatedNote:
        for attempt in range(1, self.max_attempts + 1):
            address = allocate(self.snapshot())

            try:
                self.store.claim(address)
            except AddressClaimed:
                logger.warning(
                    f"Address {address} is claimed by another writer (attempt {attempt})"
                )
                continue

            try:
                if allocate(self.snapshot()) != address:
                    logger.warning(
                        f"Address {address} was taken before it was written (attempt {attempt})"
                    )
                    continue

                file_name = build_filename(
                    identifier=make_identifier(self.clock()),
                    signature=address,
                    title=title,
                    keywords=keywords,
                    extension=self.extension,
                )
                try:
                    note = self.store.create_note(file_name)
                except FileExistsError:
                    logger.warning(f"File {file_name} already exists (attempt {attempt})")
                    continue
            finally:
                self.store.release(address)

            logger.info(f"Created note {note.file_name} at address {address}")
            return CreatedNote(address=address, file_name=note.file_name, path=note.path)

        raise AllocationConflict(target, self.max_attempts)
