# backend/app/routers/portfolio.py
"""Holdings, positions and orders (bearer token required)"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from app.api.deps import get_current_claims, get_holding_repo, get_order_repo, get_position_repo
from app.core.errors import InvalidRequest, handler_boundary
from app.db.repositories import HoldingRepository, OrderRepository, PositionRepository
from app.schemas.auth import TokenClaims
from app.schemas.orders import OrderCreate
from app.logger import get_logger

log = get_logger(__name__)

# The gate is a router dependency so it resolves before any repository
router = APIRouter(tags=["Portfolio"], dependencies=[Depends(get_current_claims)])


async def read_order(
    request: Request,
    claims: TokenClaims = Depends(get_current_claims),
) -> OrderCreate:
    """Parse the order body only after the token has been accepted"""
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequest(f"order body is not JSON: {e}") from e
    try:
        return OrderCreate.model_validate(body)
    except ValidationError as e:
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in e.errors()]
        log.warning("Rejected order body from %s: %s", claims.email, fields)
        raise InvalidRequest(f"order body invalid: {fields}") from e


@router.get("/allHoldings", response_model=List[Dict[str, Any]])
async def all_holdings(holdings: HoldingRepository = Depends(get_holding_repo)):
    with handler_boundary("list holdings"):
        return await holdings.list_all()


@router.get("/allPositions", response_model=List[Dict[str, Any]])
async def all_positions(positions: PositionRepository = Depends(get_position_repo)):
    with handler_boundary("list positions"):
        return await positions.list_all()


@router.post(
    "/newOrder",
    response_class=PlainTextResponse,
    openapi_extra={"requestBody": {
        "required": True,
        "content": {"application/json": {"schema": OrderCreate.model_json_schema()}},
    }},
)
async def new_order(
    order: OrderCreate = Depends(read_order),
    claims: TokenClaims = Depends(get_current_claims),
    orders: OrderRepository = Depends(get_order_repo),
):
    """Persist an order exactly as submitted"""
    with handler_boundary("new order"):
        order_id = await orders.create_order(order)
    log.info("Order %s saved (%s %s x %s) by %s", order_id, order.mode, order.name, order.qty, claims.email)
    return "Order saved!"
