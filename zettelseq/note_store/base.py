from typing import List, Optional, Protocol

from zettelseq.domain.note import NoteFile


class NoteStore(Protocol):
    """Protocol for note storage implementations."""

    def list_notes(self) -> List[NoteFile]:
        """List all note files in the store."""
        ...

    def signatures(self) -> List[Optional[str]]:
        """Get the raw signature field of every note, None where missing."""
        ...

    def create_note(self, file_name: str, content: str = "") -> NoteFile:
        """Create a new note file, failing with FileExistsError if the name is taken."""
        ...

    def claim(self, address: str) -> None:
        """Take an exclusive claim on an address, raising AddressClaimed if it is held."""
        ...

    def release(self, address: str) -> None:
        """Release a claim taken with claim()."""
        ...
