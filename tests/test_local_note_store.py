"""Tests for the directory backed note store."""

import json
import os
import time
from pathlib import Path

import pytest

from zettelseq.domain.errors import AddressClaimed
from zettelseq.note_store.local import CLAIMS_DIR, LocalNoteStore


def test_list_notes_skips_non_notes(local_store: LocalNoteStore) -> None:
    """Test that only identifier-named note files are listed."""
    notes = local_store.list_notes()

    assert len(notes) == 9
    assert "README.md" not in [note.file_name for note in notes]
    assert notes[0].identifier == "20240101T120000"
    assert notes[0].signature == "1"
    assert notes[0].title == "note-0"


def test_signatures_include_notes_without_one(local_store: LocalNoteStore) -> None:
    signatures = local_store.signatures()

    assert None in signatures
    assert "1=2=1=1" in signatures


def test_list_notes_ignores_hidden_and_other_extensions(notes_directory: Path) -> None:
    hidden = notes_directory / ".trash"
    hidden.mkdir()
    (hidden / "20240101T140000==9.md").write_text("")
    (notes_directory / "20240101T140001==8.pdf").write_text("")
    nested = notes_directory / "archive"
    nested.mkdir()
    (nested / "20240101T140002==7.org").write_text("")

    signatures = LocalNoteStore(notes_directory).signatures()

    assert "9" not in signatures
    assert "8" not in signatures
    assert "7" in signatures


def test_missing_directory_is_empty(tmp_path: Path) -> None:
    assert LocalNoteStore(tmp_path / "missing").list_notes() == []


def test_create_note_is_exclusive(local_store: LocalNoteStore) -> None:
    note = local_store.create_note("20240301T093000==3--new.md", "# New\n")

    assert Path(note.path).read_text() == "# New\n"
    assert note.signature == "3"
    with pytest.raises(FileExistsError):
        local_store.create_note("20240301T093000==3--new.md")


def test_claim_and_release(local_store: LocalNoteStore, notes_directory: Path) -> None:
    """Test that a claim blocks a second claim until released."""
    local_store.claim("1=3")
    assert (notes_directory / CLAIMS_DIR / "1=3.lock").exists()

    with pytest.raises(AddressClaimed):
        LocalNoteStore(notes_directory).claim("1=3")

    local_store.release("1=3")
    LocalNoteStore(notes_directory).claim("1=3")


def test_claims_are_not_listed_as_notes(local_store: LocalNoteStore) -> None:
    local_store.claim("5")

    assert "5" not in local_store.signatures()


def test_claim_records_claimant(local_store: LocalNoteStore, notes_directory: Path) -> None:
    local_store.claim("1=3")

    data = json.loads((notes_directory / CLAIMS_DIR / "1=3.lock").read_text())
    assert data["pid"] == os.getpid()
    assert time.time() - data["claimed_at"] < 60


def test_stale_claim_is_taken_over(notes_directory: Path) -> None:
    """Test that a claim left behind by a dead writer expires after the timeout."""
    claims_dir = notes_directory / CLAIMS_DIR
    claims_dir.mkdir()
    (claims_dir / "1=3.lock").write_text(
        json.dumps({"pid": 999999, "claimed_at": time.time() - 3600})
    )
    store = LocalNoteStore(notes_directory, claim_timeout=60)

    store.claim("1=3")

    data = json.loads((claims_dir / "1=3.lock").read_text())
    assert data["pid"] == os.getpid()
    assert sorted(path.name for path in claims_dir.iterdir()) == ["1=3.lock"]


def test_stale_claim_without_contents_uses_mtime(notes_directory: Path) -> None:
    claims_dir = notes_directory / CLAIMS_DIR
    claims_dir.mkdir()
    lock = claims_dir / "2=1.lock"
    lock.write_text("")
    old = time.time() - 3600
    os.utime(lock, (old, old))

    LocalNoteStore(notes_directory, claim_timeout=60).claim("2=1")

    with pytest.raises(AddressClaimed):
        LocalNoteStore(notes_directory, claim_timeout=60).claim("2=1")


def test_fresh_claim_is_not_taken_over(notes_directory: Path) -> None:
    claims_dir = notes_directory / CLAIMS_DIR
    claims_dir.mkdir()
    (claims_dir / "1=3.lock").write_text(json.dumps({"pid": 999999, "claimed_at": time.time()}))

    with pytest.raises(AddressClaimed):
        LocalNoteStore(notes_directory, claim_timeout=60).claim("1=3")
