"""Sale endpoints: every write goes through the sale transaction manager."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import PageParams, get_page_params, get_sale_manager
from src.application.dto.requests import CreateSaleRequest, UpdateSaleRequest
from src.application.dto.responses import (
    ErrorResponse,
    SaleListResponse,
    SaleResponse,
)
from src.application.use_cases import SaleTransactionManager

router = APIRouter(prefix="/api/sales", tags=["sales"])


@router.post(
    "",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_sale(
    request: CreateSaleRequest,
    manager: SaleTransactionManager = Depends(get_sale_manager),
) -> SaleResponse:
    """Record a sale; each line removes its quantity from stock or the sale is refused."""
    sale = await manager.create(request)
    return SaleResponse.model_validate(sale)


@router.get("", response_model=SaleListResponse)
async def list_sales(
    customer_id: int | None = Query(None, alias="customerId"),
    status_filter: str | None = Query(None, alias="status"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    page: PageParams = Depends(get_page_params),
    manager: SaleTransactionManager = Depends(get_sale_manager),
) -> SaleListResponse:
    """List sales, newest first."""
    sales, total = await manager.list(
        party_id=customer_id,
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        page=page.page,
        limit=page.limit,
    )
    return SaleListResponse(
        sales=[SaleResponse.model_validate(s) for s in sales],
        **page.envelope(total),
    )


@router.get(
    "/{sale_id}",
    response_model=SaleResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_sale(
    sale_id: int,
    manager: SaleTransactionManager = Depends(get_sale_manager),
) -> SaleResponse:
    """Get a sale with customer and item names."""
    return SaleResponse.model_validate(await manager.get(sale_id))


@router.patch(
    "/{sale_id}",
    response_model=SaleResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_sale(
    sale_id: int,
    request: UpdateSaleRequest,
    manager: SaleTransactionManager = Depends(get_sale_manager),
) -> SaleResponse:
    """Change amounts, status or line quantities; stock follows quantity changes."""
    sale = await manager.update(sale_id, request)
    return SaleResponse.model_validate(sale)


@router.delete(
    "/{sale_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_sale(
    sale_id: int,
    manager: SaleTransactionManager = Depends(get_sale_manager),
) -> Response:
    """Delete a sale and return its quantities to stock."""
    await manager.delete(sale_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
