"""Purchase endpoints: every write goes through the purchase transaction manager."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import PageParams, get_page_params, get_purchase_manager
from src.application.dto.requests import CreatePurchaseRequest, UpdatePurchaseRequest
from src.application.dto.responses import (
    ErrorResponse,
    PurchaseListResponse,
    PurchaseResponse,
)
from src.application.use_cases import PurchaseTransactionManager

router = APIRouter(prefix="/api/purchases", tags=["purchases"])


@router.post(
    "",
    response_model=PurchaseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_purchase(
    request: CreatePurchaseRequest,
    manager: PurchaseTransactionManager = Depends(get_purchase_manager),
) -> PurchaseResponse:
    """Record a purchase; each line adds its quantity to stock."""
    purchase = await manager.create(request)
    return PurchaseResponse.model_validate(purchase)


@router.get("", response_model=PurchaseListResponse)
async def list_purchases(
    supplier_id: int | None = Query(None, alias="supplierId"),
    status_filter: str | None = Query(None, alias="status"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    page: PageParams = Depends(get_page_params),
    manager: PurchaseTransactionManager = Depends(get_purchase_manager),
) -> PurchaseListResponse:
    """List purchases, newest first."""
    purchases, total = await manager.list(
        party_id=supplier_id,
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        page=page.page,
        limit=page.limit,
    )
    return PurchaseListResponse(
        purchases=[PurchaseResponse.model_validate(p) for p in purchases],
        **page.envelope(total),
    )


@router.get(
    "/{purchase_id}",
    response_model=PurchaseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase(
    purchase_id: int,
    manager: PurchaseTransactionManager = Depends(get_purchase_manager),
) -> PurchaseResponse:
    """Get a purchase with supplier and item names."""
    return PurchaseResponse.model_validate(await manager.get(purchase_id))


@router.patch(
    "/{purchase_id}",
    response_model=PurchaseResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_purchase(
    purchase_id: int,
    request: UpdatePurchaseRequest,
    manager: PurchaseTransactionManager = Depends(get_purchase_manager),
) -> PurchaseResponse:
    """Change amounts, status or line quantities; stock follows quantity changes."""
    purchase = await manager.update(purchase_id, request)
    return PurchaseResponse.model_validate(purchase)


@router.delete(
    "/{purchase_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_purchase(
    purchase_id: int,
    manager: PurchaseTransactionManager = Depends(get_purchase_manager),
) -> Response:
    """Delete a purchase and take its quantities back out of stock."""
    await manager.delete(purchase_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
