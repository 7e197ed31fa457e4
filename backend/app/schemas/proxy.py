from typing import Literal

from app.schemas.resource import Resource, Ref


class Proxy(Resource):
    enabled: bool = False
    kind: Literal["http", "https"]
    host: str = ""
    port: int = 0
    excluded: list[str] | None = None  # hosts that bypass the proxy
    identity: Ref | None = None
