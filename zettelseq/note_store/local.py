import json
import os
import time
from pathlib import Path
from typing import List, Optional

from loguru import logger

from zettelseq.domain.errors import AddressClaimed
from zettelseq.domain.note import NoteFile
from zettelseq.ingestion.filename import extract_identifier, extract_signature, extract_title
from zettelseq.note_store.base import NoteStore

CLAIMS_DIR = ".zettelseq-claims"


class LocalNoteStore(NoteStore):
    """Note store backed by a directory of note files."""

    def __init__(
        self,
        notes_dir: str | Path,
        extensions: list[str] | None = None,
        claim_timeout: float = 300.0,
    ) -> None:
        """Initialize LocalNoteStore.

        Args:
            notes_dir: Directory holding the notes. Searched recursively,
                      hidden directories are skipped.
            extensions: File extensions counted as notes, with leading dot
            claim_timeout: Seconds after which a claim left behind by a
                      writer that never released it may be taken over
        """
        self.notes_dir = Path(notes_dir)
        self.extensions = extensions or [".md", ".org", ".txt"]
        self.claim_timeout = claim_timeout

    def list_notes(self) -> List[NoteFile]:
        """List every note file, in file name order."""
        if not self.notes_dir.exists():
            logger.warning(f"Notes directory {self.notes_dir} does not exist")
            return []

        notes = []
        for path in sorted(self.notes_dir.rglob("*")):
            relative_parts = path.relative_to(self.notes_dir).parts
            if any(part.startswith(".") for part in relative_parts):
                continue
            if not path.is_file() or path.suffix not in self.extensions:
                continue

            identifier = extract_identifier(path.name)
            if identifier is None:
                continue

            notes.append(
                NoteFile(
                    path=str(path.absolute()),
                    file_name=path.name,
                    identifier=identifier,
                    signature=extract_signature(path.name),
                    title=extract_title(path.name),
                )
            )
        return notes

    def signatures(self) -> List[Optional[str]]:
        return [note.signature for note in self.list_notes()]

    def create_note(self, file_name: str, content: str = "") -> NoteFile:
        """Create a note file exclusively.

        Raises:
            FileExistsError: If a file with this name already exists
        """
        self.notes_dir.mkdir(parents=True, exist_ok=True)
        path = self.notes_dir / file_name
        with open(path, "x", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Created note {path}")

        return NoteFile(
            path=str(path.absolute()),
            file_name=file_name,
            identifier=extract_identifier(file_name) or "",
            signature=extract_signature(file_name),
            title=extract_title(file_name),
        )

    def _claim_path(self, address: str) -> Path:
        return self.notes_dir / CLAIMS_DIR / f"{address}.lock"

    def _claim_age(self, claim_path: Path) -> float | None:
        """Seconds since the claim was taken, None if it is already gone.

        Uses the timestamp written by claim(), falling back to the file's
        modification time for claims without readable contents.
        """
        try:
            with open(claim_path, "r") as f:
                claimed_at = float(json.load(f)["claimed_at"])
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            try:
                claimed_at = claim_path.stat().st_mtime
            except FileNotFoundError:
                return None
        return time.time() - claimed_at

    def _remove_stale_claim(self, address: str, claim_path: Path) -> bool:
        """Remove the claim on ``address`` if it has outlived the timeout."""
        age = self._claim_age(claim_path)
        if age is None:
            return True
        if age < self.claim_timeout:
            return False

        # At most one writer can rename a given claim file
        stale_path = claim_path.with_name(f"{claim_path.name}.stale-{os.getpid()}-{time.time_ns()}")
        try:
            claim_path.rename(stale_path)
        except FileNotFoundError:
            return True
        stale_path.unlink(missing_ok=True)
        logger.warning(f"Removed stale claim on address {address} ({age:.0f}s old)")
        return True

    def claim(self, address: str) -> None:
        """Take an exclusive claim on ``address``.

        The claim file records the claimant's pid and the time it was taken.
        An existing claim older than ``claim_timeout`` is treated as left
        behind by a writer that died, and is taken over.

        Raises:
            AddressClaimed: If a live claim on ``address`` exists
        """
        claim_path = self._claim_path(address)
        claim_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(claim_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError as e:
            if not self._remove_stale_claim(address, claim_path):
                raise AddressClaimed(address) from e
            try:
                fd = os.open(claim_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            except FileExistsError as err:
                raise AddressClaimed(address) from err

        with os.fdopen(fd, "w") as f:
            json.dump({"pid": os.getpid(), "claimed_at": time.time()}, f)
        logger.debug(f"Claimed address {address}")

    def release(self, address: str) -> None:
        self._claim_path(address).unlink(missing_ok=True)
        logger.debug(f"Released address {address}")
