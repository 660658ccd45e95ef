from pydantic import BaseModel


class NoteRequest(BaseModel):
    target: str | None = None
    title: str = ""
    keywords: list[str] = []


class SplitResponse(BaseModel):
    address: str
    components: list[str]
    depth: int


class AddressesResponse(BaseModel):
    addresses: list[str]
