"""Tests for creating notes at newly allocated addresses."""

import json
import time
from datetime import datetime
from pathlib import Path

import pytest

from tests.fakes import FakeNoteStore
from zettelseq.domain.errors import AllocationConflict, UnknownSequence
from zettelseq.domain.sequence import Scheme
from zettelseq.ingestion.orchestrator import NoteCreator
from zettelseq.note_store.local import CLAIMS_DIR, LocalNoteStore

TREE = [
    "20240101T120000==1--first.md",
    "20240101T120001==1=1--child.md",
    "20240101T120002==2--second.md",
]


def make_creator(store: FakeNoteStore | LocalNoteStore, fixed_clock: datetime) -> NoteCreator:
    return NoteCreator(store=store, scheme=Scheme.NUMERIC, clock=lambda: fixed_clock)


def test_create_child(fixed_clock: datetime) -> None:
    store = FakeNoteStore(TREE)

    created = make_creator(store, fixed_clock).create_child("1", "A new idea", ["zettel"])

    assert created.address == "1=2"
    assert created.file_name == "20240301T093000==1=2--a-new-idea__zettel.md"
    assert "1=2" in store.signatures()
    assert store.claims == set()


def test_create_sibling_and_root(fixed_clock: datetime) -> None:
    store = FakeNoteStore(TREE)
    creator = make_creator(store, fixed_clock)

    assert creator.create_sibling("1=1", "Sibling").address == "1=2"
    assert creator.create_root("Root").address == "3"


def test_create_unknown_target(fixed_clock: datetime) -> None:
    store = FakeNoteStore(TREE)

    with pytest.raises(UnknownSequence):
        make_creator(store, fixed_clock).create_child("7", "Orphan")
    assert store.claims == set()


def test_retries_when_another_writer_wins(fixed_clock: datetime) -> None:
    """Test that a note written by someone else mid-allocation moves us to the next address."""

    def competing_writer(store: FakeNoteStore) -> None:
        # Between our first snapshot and the confirmation snapshot
        if store.snapshots == 2:
            store.add("20240301T092959==1=2--theirs.md")

    store = FakeNoteStore(TREE, on_snapshot=competing_writer)

    created = make_creator(store, fixed_clock).create_child("1", "Ours")

    assert created.address == "1=3"
    assert store.released == ["1=2", "1=3"]


def test_retries_when_address_is_claimed(fixed_clock: datetime) -> None:
    store = FakeNoteStore(TREE)
    store.claims.add("1=2")

    def finish_other_writer(store: FakeNoteStore) -> None:
        if store.snapshots == 2:
            store.add("20240301T092959==1=2--theirs.md")
            store.claims.discard("1=2")

    store.on_snapshot = finish_other_writer

    created = make_creator(store, fixed_clock).create_child("1", "Ours")

    assert created.address == "1=3"


def test_gives_up_after_max_attempts(fixed_clock: datetime) -> None:
    store = FakeNoteStore(TREE)
    store.claims.add("1=2")
    creator = NoteCreator(store=store, scheme=Scheme.NUMERIC, max_attempts=3)

    with pytest.raises(AllocationConflict) as exc_info:
        creator.create_child("1", "Blocked")

    assert exc_info.value.attempts == 3
    assert exc_info.value.target == "1"


def test_create_in_local_store(
    local_store: LocalNoteStore, notes_directory: Path, fixed_clock: datetime
) -> None:
    created = make_creator(local_store, fixed_clock).create_child("1=1=2", "Deep thought")

    assert created.address == "1=1=2=1"
    assert Path(created.path).exists()
    assert Path(created.path).parent == notes_directory
    assert list((notes_directory / CLAIMS_DIR).iterdir()) == []


def test_create_after_writer_died_holding_claim(tmp_path: Path, fixed_clock: datetime) -> None:
    """Test that a claim never released by a crashed writer does not block creation forever."""
    notes_dir = tmp_path / "notes"
    notes_dir.mkdir()
    (notes_dir / "20240101T120000==1--a.md").write_text("")
    claims_dir = notes_dir / CLAIMS_DIR
    claims_dir.mkdir()
    lock = claims_dir / "1=1.lock"
    lock.write_text(json.dumps({"pid": 999999, "claimed_at": time.time() - 3600}))

    blocked = LocalNoteStore(notes_dir, claim_timeout=7200)
    with pytest.raises(AllocationConflict):
        NoteCreator(store=blocked, scheme=Scheme.NUMERIC, max_attempts=2).create_child("1", "x")

    store = LocalNoteStore(notes_dir, claim_timeout=60)
    created = make_creator(store, fixed_clock).create_child("1", "x")

    assert created.address == "1=1"
    assert Path(created.path).exists()
    assert list(claims_dir.iterdir()) == []
