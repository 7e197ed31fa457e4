from app.models.identity import Identity
from app.models.proxy import Proxy

__all__ = ["Identity", "Proxy"]
