"""Note file domain models."""

from pydantic import BaseModel


class NoteFile(BaseModel):
    """A note file found in the notes directory.

    Attributes:
        path: Absolute file path
        file_name: File name including extension
        identifier: Timestamp identifier at the start of the file name
        signature: Raw signature field, None if the name has none
        title: Title slug from the file name
    """

    path: str
    file_name: str
    identifier: str
    signature: str | None = None
    title: str = ""


class CreatedNote(BaseModel):
    """Result of creating a note at a newly allocated address."""

    address: str
    file_name: str
    path: str
