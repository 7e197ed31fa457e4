from datetime import datetime

from pydantic import BaseModel


class Resource(BaseModel):
    """Fields every hub resource carries. Populated by the server only."""

    id: int | None = None
    create_user: str = ""
    update_user: str = ""
    create_time: datetime | None = None


class Ref(BaseModel):
    """Lightweight reference to another entity."""

    id: int
    name: str = ""
