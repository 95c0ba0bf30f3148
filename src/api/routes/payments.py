"""Payment endpoints. Account payments debit the bank account they name."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.dependencies import PageParams, get_page_params, get_payment_manager
from src.application.dto.requests import CreatePaymentRequest, UpdateCashMovementRequest
from src.application.dto.responses import (
    ErrorResponse,
    PaymentListResponse,
    PaymentResponse,
)
from src.application.use_cases import PaymentTransactionManager

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_payment(
    request: CreatePaymentRequest,
    manager: PaymentTransactionManager = Depends(get_payment_manager),
) -> PaymentResponse:
    """Record a payment to a supplier."""
    payment = await manager.create(request)
    return PaymentResponse.model_validate(payment)


@router.get("", response_model=PaymentListResponse)
async def list_payments(
    supplier_id: int | None = Query(None, alias="supplierId"),
    account_id: int | None = Query(None, alias="accountId"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    page: PageParams = Depends(get_page_params),
    manager: PaymentTransactionManager = Depends(get_payment_manager),
) -> PaymentListResponse:
    payments, total = await manager.list(
        party_id=supplier_id,
        account_id=account_id,
        start_date=start_date,
        end_date=end_date,
        page=page.page,
        limit=page.limit,
    )
    return PaymentListResponse(
        payments=[PaymentResponse.model_validate(p) for p in payments],
        **page.envelope(total),
    )


@router.get(
    "/{payment_id}",
    response_model=PaymentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_payment(
    payment_id: int,
    manager: PaymentTransactionManager = Depends(get_payment_manager),
) -> PaymentResponse:
    return PaymentResponse.model_validate(await manager.get(payment_id))


@router.patch(
    "/{payment_id}",
    response_model=PaymentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_payment(
    payment_id: int,
    request: UpdateCashMovementRequest,
    manager: PaymentTransactionManager = Depends(get_payment_manager),
) -> PaymentResponse:
    """Edit the date or note. Amount, method and account are fixed."""
    payment = await manager.update(payment_id, request)
    return PaymentResponse.model_validate(payment)


@router.delete(
    "/{payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_payment(
    payment_id: int,
    manager: PaymentTransactionManager = Depends(get_payment_manager),
) -> Response:
    """Delete a payment, crediting the amount back to its account."""
    await manager.delete(payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
