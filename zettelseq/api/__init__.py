from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zettelseq.api.endpoints import get_endpoints_router
from zettelseq.domain.sequence import Scheme
from zettelseq.ingestion.orchestrator import NoteCreator
from zettelseq.note_store.base import NoteStore


def create_app(
    *,
    store: NoteStore,
    scheme: Scheme,
    max_attempts: int = 5,
    extension: str = ".md",
) -> FastAPI:
    """Create FastAPI app."""
    app = FastAPI()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    creator = NoteCreator(
        store=store, scheme=scheme, max_attempts=max_attempts, extension=extension
    )
    app.include_router(router=get_endpoints_router(creator=creator))

    return app
