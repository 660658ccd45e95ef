from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from zettelseq.api.auth import verify_credentials
from zettelseq.api.schemas import AddressesResponse, NoteRequest, SplitResponse
from zettelseq.domain.errors import (
    AllocationConflict,
    InvalidComponent,
    MalformedSequence,
    SequenceError,
    UnknownSequence,
)
from zettelseq.domain.note import CreatedNote
from zettelseq.domain.sequence import Scheme
from zettelseq.ingestion.orchestrator import NoteCreator
from zettelseq.sequences import Relation, convert, get_relative, split


def _http_error(error: SequenceError) -> HTTPException:
    """Map a sequence error to the matching HTTP error."""
    if isinstance(error, (MalformedSequence, InvalidComponent)):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, UnknownSequence):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, AllocationConflict):
        return HTTPException(status_code=409, detail=str(error))
    logger.error(f"Unhandled sequence error: {error}")
    return HTTPException(status_code=500, detail="Internal server error")


def _create_split_endpoint(default_scheme: Scheme):
    """Create the split endpoint handler."""

    async def split_address(
        address: str,
        scheme: Scheme | None = None,
        _: str = Depends(verify_credentials),
    ) -> SplitResponse:
        try:
            sequence = split(scheme or default_scheme, address)
        except SequenceError as e:
            raise _http_error(e) from e
        return SplitResponse(
            address=sequence.address, components=list(sequence.components), depth=sequence.depth
        )

    return split_address


def _create_convert_endpoint():
    """Create the convert endpoint handler."""

    async def convert_address(
        address: str,
        target: Scheme,
        _: str = Depends(verify_credentials),
    ):
        try:
            return {"address": convert(address, target), "scheme": target}
        except SequenceError as e:
            raise _http_error(e) from e

    return convert_address


def _create_list_endpoint(creator: NoteCreator):
    """Create the endpoint listing every address in tree order."""

    def list_sequences(_: str = Depends(verify_credentials)) -> AddressesResponse:
        collection = creator.snapshot()
        return AddressesResponse(addresses=[sequence.address for sequence in collection.sorted()])

    return list_sequences


def _create_relatives_endpoint(creator: NoteCreator):
    """Create the relatives lookup endpoint handler."""

    def relatives(
        address: str,
        relation: Relation,
        _: str = Depends(verify_credentials),
    ) -> AddressesResponse:
        collection = creator.snapshot()
        try:
            addresses = get_relative(relation, address, collection, creator.scheme)
        except SequenceError as e:
            raise _http_error(e) from e
        return AddressesResponse(addresses=addresses)

    return relatives


def _create_note_endpoint(creator: NoteCreator, position: str):
    """Create the handler that writes a new child, sibling or root note."""

    def create_note(
        request: NoteRequest,
        _: str = Depends(verify_credentials),
    ) -> CreatedNote:
        if position != "root" and not request.target:
            raise HTTPException(status_code=422, detail="A target address is required")

        try:
            if position == "child":
                return creator.create_child(request.target, request.title, request.keywords)
            if position == "sibling":
                return creator.create_sibling(request.target, request.title, request.keywords)
            return creator.create_root(request.title, request.keywords)
        except SequenceError as e:
            raise _http_error(e) from e

    return create_note


def get_endpoints_router(*, creator: NoteCreator) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy", "scheme": creator.scheme}

    router.get("/sequences")(_create_list_endpoint(creator))
    router.get("/sequences/split")(_create_split_endpoint(creator.scheme))
    router.get("/sequences/convert")(_create_convert_endpoint())
    router.get("/sequences/relatives")(_create_relatives_endpoint(creator))
    router.post("/notes/child", status_code=201)(_create_note_endpoint(creator, "child"))
    router.post("/notes/sibling", status_code=201)(_create_note_endpoint(creator, "sibling"))
    router.post("/notes/root", status_code=201)(_create_note_endpoint(creator, "root"))

    return router
