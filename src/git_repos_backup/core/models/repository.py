"""Remote repository models."""

from enum import Enum

from pydantic import BaseModel


class Repository(BaseModel):
    """A remote repository as listed by a provider."""

    id: int
    login: str  # owner login
    name: str
    full_name: str
    url: str  # clone URL

    class Config:
        frozen = True


class SyncAction(str, Enum):
    """What the sync engine did to a local mirror."""

    INITIALIZED = "initialized"
    FETCHED = "fetched"
