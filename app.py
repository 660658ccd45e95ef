import sys

from loguru import logger

from zettelseq.api import create_app
from zettelseq.config import settings
from zettelseq.note_store.local import LocalNoteStore

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

logger.info(f"Serving {settings.scheme.value} sequences from {settings.notes_dir}")
store = LocalNoteStore(
    settings.notes_dir,
    extensions=settings.note_extensions,
    claim_timeout=settings.claim_timeout,
)
app = create_app(
    store=store,
    scheme=settings.scheme,
    max_attempts=settings.allocation_attempts,
    extension=settings.note_extension,
)
