from pydantic import BaseModel
from typing import Generic, TypeVar, List

T = TypeVar('T')


class Envelope(BaseModel):
    ok: bool = True


class ItemEnvelope(Envelope, Generic[T]):
    item: T


class ListEnvelope(Envelope, Generic[T]):
    items: List[T]


class DeletedEnvelope(Envelope):
    deleted: bool = True
    id: str


class ErrorEnvelope(BaseModel):
    ok: bool = False
    error: str


class HealthResponse(Envelope):
    service: str
    now: str
