"""Read and write the fields of a note file name.

Note files are named ``IDENTIFIER==SIGNATURE--title__keyword1_keyword2.ext``
where the identifier is a ``YYYYMMDDTHHMMSS`` timestamp. Every field except
the identifier is optional.
"""

import re
from datetime import datetime

IDENTIFIER_FORMAT = "%Y%m%dT%H%M%S"

SIGNATURE_MARKER = "=="
TITLE_MARKER = "--"
KEYWORDS_MARKER = "__"

_IDENTIFIER_PATTERN = re.compile(r"\d{8}T\d{6}")
_SIGNATURE_PATTERN = re.compile(r"==(?P<signature>[^.]*?)(?=--|__|@@|\.|$)")
_TITLE_PATTERN = re.compile(r"--(?P<title>[^.]*?)(?===|__|@@|\.|$)")


def extract_identifier(file_name: str) -> str | None:
    match = _IDENTIFIER_PATTERN.search(file_name)
    return match.group(0) if match else None


def extract_signature(file_name: str) -> str | None:
    """Return the signature field of a file name, or None if it has none.

    Args:
        file_name: Bare file name, e.g. ``20240101T120000==1=2--title.md``

    Returns:
        The text between the ``==`` marker and the next field marker
    """
    match = _SIGNATURE_PATTERN.search(file_name)
    if not match or not match.group("signature"):
        return None
    return match.group("signature")


def extract_title(file_name: str) -> str:
    match = _TITLE_PATTERN.search(file_name)
    return match.group("title") if match else ""


def slugify_title(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def make_identifier(moment: datetime | None = None) -> str:
    return (moment or datetime.now()).strftime(IDENTIFIER_FORMAT)


def build_filename(
    *,
    identifier: str,
    signature: str,
    title: str = "",
    keywords: list[str] | None = None,
    extension: str = ".md",
) -> str:
    """Assemble a note file name from its fields.

    Args:
        identifier: Timestamp identifier
        signature: Address of the note
        title: Free-form title, slugified into the name
        keywords: Keywords, slugified and joined with ``_``
        extension: File extension including the dot

    Returns:
        The file name
    """
    file_name = f"{identifier}{SIGNATURE_MARKER}{signature}"

    slug = slugify_title(title)
    if slug:
        file_name += f"{TITLE_MARKER}{slug}"

    keyword_slugs = [slugify_title(keyword).replace("-", "") for keyword in keywords or []]
    keyword_slugs = [keyword for keyword in keyword_slugs if keyword]
    if keyword_slugs:
        file_name += KEYWORDS_MARKER + "_".join(keyword_slugs)

    return file_name + extension
