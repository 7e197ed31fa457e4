"""Proxy configuration CRUD endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_page, require_scope
from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.core.metrics import count_operation
from app.core.pagination import Page
from app.core.security import Caller
from app.models.proxy import Proxy as ProxyModel
from app.schemas.proxy import Proxy
from app.services.proxy import proxy_to_resource, resource_to_model, update_values

# proxies.id is a 32-bit INTEGER column
MAX_PROXY_ID = 2**31 - 1

proxies_scope = require_scope("proxies")

router = APIRouter(dependencies=[Depends(proxies_scope)])
logger = logging.getLogger(__name__)


def _check_id(proxy_id: int) -> None:
    """Ids the column cannot hold can never match a row."""
    if not 1 <= proxy_id <= MAX_PROXY_ID:
        raise NotFoundError("Proxy not found")


async def _load_proxy(db: AsyncSession, proxy_id: int, with_identity: bool = True) -> ProxyModel:
    _check_id(proxy_id)
    stmt = select(ProxyModel).where(ProxyModel.id == proxy_id)
    if with_identity:
        stmt = stmt.options(selectinload(ProxyModel.identity)).execution_options(
            populate_existing=True
        )
    result = await db.execute(stmt)
    config = result.scalar_one_or_none()
    if not config:
        raise NotFoundError("Proxy not found")
    return config


@router.get("", response_model=list[Proxy])
@router.get("/", response_model=list[Proxy], include_in_schema=False)
async def list_proxies(
    kind: str | None = Query(None),
    page: Page = Depends(get_page),
    db: AsyncSession = Depends(get_db),
):
    """List proxies, optionally filtered by kind."""
    stmt = (
        select(ProxyModel)
        .options(selectinload(ProxyModel.identity))
        .execution_options(populate_existing=True)
        .order_by(ProxyModel.id)
    )
    if kind:
        stmt = stmt.where(ProxyModel.kind == kind)
    result = await db.execute(page.apply(stmt))
    configs = result.scalars().all()

    return [proxy_to_resource(c) for c in configs]


@router.get("/{proxy_id}", response_model=Proxy)
async def get_proxy(
    proxy_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a proxy by id."""
    config = await _load_proxy(db, proxy_id)
    return proxy_to_resource(config)


@router.post("", response_model=Proxy, status_code=status.HTTP_201_CREATED)
async def create_proxy(
    request: Proxy,
    caller: Caller = Depends(proxies_scope),
    db: AsyncSession = Depends(get_db),
):
    """Create a proxy. The id is assigned by storage."""
    with count_operation("create"):
        config = resource_to_model(request)
        config.id = None
        config.create_user = caller.user
        db.add(config)
        await db.flush()
        await db.refresh(config, ["identity"])

    logger.info(f"Proxy {config.id} ({config.kind}) created by {caller.user}")
    return proxy_to_resource(config)


@router.put("/{proxy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_proxy(
    proxy_id: int,
    request: Proxy,
    caller: Caller = Depends(proxies_scope),
    db: AsyncSession = Depends(get_db),
):
    """Replace a proxy's fields. The identity reference is left as stored."""
    with count_operation("update"):
        _check_id(proxy_id)
        config = resource_to_model(request)
        config.id = proxy_id
        config.update_user = caller.user

        result = await db.execute(
            update(ProxyModel)
            .where(ProxyModel.id == proxy_id)
            .values(**update_values(config))
        )
        if result.rowcount == 0:
            raise NotFoundError("Proxy not found")

    logger.info(f"Proxy {proxy_id} updated by {caller.user}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{proxy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_proxy(
    proxy_id: int,
    caller: Caller = Depends(proxies_scope),
    db: AsyncSession = Depends(get_db),
):
    """Delete a proxy."""
    with count_operation("delete"):
        config = await _load_proxy(db, proxy_id, with_identity=False)
        await db.delete(config)
        await db.flush()

    logger.info(f"Proxy {proxy_id} deleted by {caller.user}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
