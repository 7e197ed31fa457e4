"""Conversions between the proxy wire resource and its stored row.

Both directions are pure; nothing here touches the session.
"""

import json
import logging

from sqlalchemy import inspect

from app.models.proxy import Proxy as ProxyModel
from app.schemas.proxy import Proxy
from app.schemas.resource import Ref

logger = logging.getLogger(__name__)


def encode_excluded(excluded: list[str]) -> bytes:
    return json.dumps(list(excluded)).encode("utf-8")


def decode_excluded(blob: bytes | None) -> list[str]:
    """Decode the stored exclusion list. Anything unreadable decodes to []."""
    if not blob:
        return []
    try:
        value = json.loads(blob)
    except (UnicodeDecodeError, ValueError):
        logger.warning("Ignoring undecodable proxy exclusion list")
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return []
    return value


def _loaded_identity(model: ProxyModel):
    # Never trigger a lazy load; callers eager-load the association when they need the name.
    if "identity" in inspect(model).unloaded:
        return None
    return model.identity


def identity_ref(model: ProxyModel) -> Ref | None:
    if model.identity_id is None:
        return None
    identity = _loaded_identity(model)
    return Ref(id=model.identity_id, name=identity.name if identity else "")


def proxy_to_resource(model: ProxyModel) -> Proxy:
    return Proxy(
        id=model.id,
        create_user=model.create_user or "",
        update_user=model.update_user or "",
        create_time=model.create_time,
        enabled=model.enabled,
        kind=model.kind,
        host=model.host,
        port=model.port,
        excluded=decode_excluded(model.excluded),
        identity=identity_ref(model),
    )


def resource_to_model(resource: Proxy) -> ProxyModel:
    model = ProxyModel(
        id=resource.id,
        enabled=resource.enabled,
        kind=resource.kind,
        host=resource.host,
        port=resource.port,
        identity_id=resource.identity.id if resource.identity else None,
    )
    if resource.excluded is not None:
        model.excluded = encode_excluded(resource.excluded)
    return model


def update_values(model: ProxyModel) -> dict:
    """Columns written by a full update.

    The identity reference and creation audit columns are never part of it,
    and the exclusion list is only written when the payload carried one.
    """
    values = {
        "enabled": model.enabled,
        "kind": model.kind,
        "host": model.host,
        "port": model.port,
        "update_user": model.update_user,
    }
    if model.excluded is not None:
        values["excluded"] = model.excluded
    return values
