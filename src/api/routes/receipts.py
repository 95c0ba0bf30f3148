"""Receipt endpoints. Account receipts credit the bank account they name."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import PageParams, get_page_params, get_receipt_manager
from src.application.dto.requests import CreateReceiptRequest, UpdateCashMovementRequest
from src.application.dto.responses import (
    ErrorResponse,
    ReceiptListResponse,
    ReceiptResponse,
)
from src.application.use_cases import ReceiptTransactionManager

router = APIRouter(prefix="/api/receipts", tags=["receipts"])


@router.post(
    "",
    response_model=ReceiptResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_receipt(
    request: CreateReceiptRequest,
    manager: ReceiptTransactionManager = Depends(get_receipt_manager),
) -> ReceiptResponse:
    """Record a receipt from a customer."""
    receipt = await manager.create(request)
    return ReceiptResponse.model_validate(receipt)


@router.get("", response_model=ReceiptListResponse)
async def list_receipts(
    customer_id: int | None = Query(None, alias="customerId"),
    account_id: int | None = Query(None, alias="accountId"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    page: PageParams = Depends(get_page_params),
    manager: ReceiptTransactionManager = Depends(get_receipt_manager),
) -> ReceiptListResponse:
    receipts, total = await manager.list(
        party_id=customer_id,
        account_id=account_id,
        start_date=start_date,
        end_date=end_date,
        page=page.page,
        limit=page.limit,
    )
    return ReceiptListResponse(
        receipts=[ReceiptResponse.model_validate(r) for r in receipts],
        **page.envelope(total),
    )


@router.get(
    "/{receipt_id}",
    response_model=ReceiptResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_receipt(
    receipt_id: int,
    manager: ReceiptTransactionManager = Depends(get_receipt_manager),
) -> ReceiptResponse:
    return ReceiptResponse.model_validate(await manager.get(receipt_id))


@router.patch(
    "/{receipt_id}",
    response_model=ReceiptResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_receipt(
    receipt_id: int,
    request: UpdateCashMovementRequest,
    manager: ReceiptTransactionManager = Depends(get_receipt_manager),
) -> ReceiptResponse:
    """Edit the date or note. Amount, method and account are fixed."""
    receipt = await manager.update(receipt_id, request)
    return ReceiptResponse.model_validate(receipt)


@router.delete(
    "/{receipt_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_receipt(
    receipt_id: int,
    manager: ReceiptTransactionManager = Depends(get_receipt_manager),
) -> Response:
    """Delete a receipt, debiting the amount back from its account."""
    await manager.delete(receipt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
