from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from zettelseq.api import create_app
from zettelseq.domain.sequence import Scheme
from zettelseq.note_store.local import LocalNoteStore
from zettelseq.sequences import SequenceCollection, build_collection

NUMERIC_ADDRESSES = ["1", "1=1", "1=1=1", "1=1=2", "1=2", "1=2=1", "1=2=1=1", "2"]
ALPHANUMERIC_ADDRESSES = ["1", "1a", "1a1", "1a2", "1b", "1b1", "1b1a", "2"]


@pytest.fixture
def numeric_collection() -> SequenceCollection:
    return build_collection(Scheme.NUMERIC, NUMERIC_ADDRESSES)


@pytest.fixture
def alphanumeric_collection() -> SequenceCollection:
    return build_collection(Scheme.ALPHANUMERIC, ALPHANUMERIC_ADDRESSES)


@pytest.fixture
def fixed_clock() -> datetime:
    return datetime(2024, 3, 1, 9, 30, 0)


@pytest.fixture(autouse=True)
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable basic auth unless a test turns it on."""
    monkeypatch.setattr("zettelseq.config.settings.auth_username", None)
    monkeypatch.setattr("zettelseq.config.settings.auth_password", None)


@pytest.fixture
def notes_directory(tmp_path: Path) -> Path:
    """Notes directory holding the numeric test tree plus a few unrelated files."""
    notes_dir = tmp_path / "notes"
    notes_dir.mkdir()
    for index, address in enumerate(NUMERIC_ADDRESSES):
        (notes_dir / f"20240101T1200{index:02d}=={address}--note-{index}.md").write_text(
            f"# Note {address}\n"
        )
    (notes_dir / "20240101T130000--no-signature.md").write_text("# Loose note\n")
    (notes_dir / "README.md").write_text("Not a note\n")
    return notes_dir


@pytest.fixture
def local_store(notes_directory: Path) -> LocalNoteStore:
    return LocalNoteStore(notes_directory)


@pytest.fixture
def test_client(local_store: LocalNoteStore) -> TestClient:
    """Create test client backed by the temporary notes directory."""
    app = create_app(store=local_store, scheme=Scheme.NUMERIC)
    return TestClient(app)
