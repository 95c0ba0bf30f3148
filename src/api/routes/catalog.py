"""
Catalog endpoints: suppliers, customers, items and bank accounts.

Stock and balances are read-only here. They move only through purchases,
sales, payments and receipts.
"""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    PageParams,
    get_catalog,
    get_ledger,
    get_page_params,
    get_payment_manager,
    get_receipt_manager,
)
from src.application.dto.requests import (
    CreateAccountRequest,
    CreateItemRequest,
    CreatePartyRequest,
    UpdateAccountRequest,
    UpdateItemRequest,
)
from src.application.dto.responses import (
    AccountResponse,
    ErrorResponse,
    ItemResponse,
    PartyResponse,
    PaymentListResponse,
    PaymentResponse,
    ReceiptListResponse,
    ReceiptResponse,
    StockMovementResponse,
)
from src.application.use_cases import PaymentTransactionManager, ReceiptTransactionManager
from src.application.use_cases.validation import reject_nulls, set_fields
from src.core.entities import Account, Customer, Item, Supplier
from src.core.exceptions import NotFoundError, ValidationError
from src.infrastructure.storage.sqlite import SQLiteCatalogStore, SQLiteStockLedger

router = APIRouter(prefix="/api", tags=["catalog"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


def _update_fields(request, nullable: tuple[str, ...] = ()) -> dict:
    fields = set_fields(request)
    if not fields:
        raise ValidationError("request", "no fields to update")
    reject_nulls(fields, nullable=nullable)
    return fields


# Suppliers


@router.post(
    "/suppliers",
    response_model=PartyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_supplier(
    request: CreatePartyRequest,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> PartyResponse:
    supplier = await store.create_supplier(Supplier(**request.model_dump()))
    return PartyResponse.model_validate(supplier)


@router.get("/suppliers", response_model=list[PartyResponse])
async def list_suppliers(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> list[PartyResponse]:
    suppliers = await store.list_suppliers(limit=limit, offset=offset)
    return [PartyResponse.model_validate(s) for s in suppliers]


@router.get("/suppliers/{supplier_id}", response_model=PartyResponse, responses=_NOT_FOUND)
async def get_supplier(
    supplier_id: int,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> PartyResponse:
    supplier = await store.get_supplier(supplier_id)
    if supplier is None:
        raise NotFoundError("supplier", supplier_id)
    return PartyResponse.model_validate(supplier)


# Customers


@router.post(
    "/customers",
    response_model=PartyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    request: CreatePartyRequest,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> PartyResponse:
    customer = await store.create_customer(Customer(**request.model_dump()))
    return PartyResponse.model_validate(customer)


@router.get("/customers", response_model=list[PartyResponse])
async def list_customers(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> list[PartyResponse]:
    customers = await store.list_customers(limit=limit, offset=offset)
    return [PartyResponse.model_validate(c) for c in customers]


@router.get("/customers/{customer_id}", response_model=PartyResponse, responses=_NOT_FOUND)
async def get_customer(
    customer_id: int,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> PartyResponse:
    customer = await store.get_customer(customer_id)
    if customer is None:
        raise NotFoundError("customer", customer_id)
    return PartyResponse.model_validate(customer)


# Items


@router.post(
    "/items",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    request: CreateItemRequest,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> ItemResponse:
    """Create an item; current stock starts at the opening stock."""
    item = await store.create_item(Item(**request.model_dump()))
    return ItemResponse.model_validate(item)


@router.get("/items", response_model=list[ItemResponse])
async def list_items(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> list[ItemResponse]:
    items = await store.list_items(limit=limit, offset=offset)
    return [ItemResponse.model_validate(i) for i in items]


@router.get("/items/{item_id}", response_model=ItemResponse, responses=_NOT_FOUND)
async def get_item(
    item_id: int,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> ItemResponse:
    item = await store.get_item(item_id)
    if item is None:
        raise NotFoundError("item", item_id)
    return ItemResponse.model_validate(item)


@router.patch(
    "/items/{item_id}",
    response_model=ItemResponse,
    responses={400: {"model": ErrorResponse}, **_NOT_FOUND},
)
async def update_item(
    item_id: int,
    request: UpdateItemRequest,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> ItemResponse:
    """Edit descriptive fields and prices."""
    fields = _update_fields(request, nullable=("description",))
    item = await store.update_item(item_id, fields)
    if item is None:
        raise NotFoundError("item", item_id)
    return ItemResponse.model_validate(item)


@router.get(
    "/items/{item_id}/movements",
    response_model=list[StockMovementResponse],
    responses=_NOT_FOUND,
)
async def list_item_movements(
    item_id: int,
    limit: int = Query(default=100, ge=1, le=500),
    store: SQLiteCatalogStore = Depends(get_catalog),
    ledger: SQLiteStockLedger = Depends(get_ledger),
) -> list[StockMovementResponse]:
    """Stock movements of an item, newest first."""
    if await store.get_item(item_id) is None:
        raise NotFoundError("item", item_id)
    movements = await ledger.list_movements(item_id, limit=limit)
    return [StockMovementResponse.model_validate(m) for m in movements]


# Accounts


@router.post(
    "/accounts",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_account(
    request: CreateAccountRequest,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> AccountResponse:
    """Open an account; its balance starts at the opening balance."""
    account = await store.create_account(Account(**request.model_dump()))
    return AccountResponse.model_validate(account)


@router.get("/accounts", response_model=list[AccountResponse])
async def list_accounts(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> list[AccountResponse]:
    accounts = await store.list_accounts(limit=limit, offset=offset)
    return [AccountResponse.model_validate(a) for a in accounts]


@router.get("/accounts/{account_id}", response_model=AccountResponse, responses=_NOT_FOUND)
async def get_account(
    account_id: int,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> AccountResponse:
    account = await store.get_account(account_id)
    if account is None:
        raise NotFoundError("account", account_id)
    return AccountResponse.model_validate(account)


@router.patch(
    "/accounts/{account_id}",
    response_model=AccountResponse,
    responses={400: {"model": ErrorResponse}, **_NOT_FOUND},
)
async def update_account(
    account_id: int,
    request: UpdateAccountRequest,
    store: SQLiteCatalogStore = Depends(get_catalog),
) -> AccountResponse:
    """Edit bank name, number or holder."""
    account = await store.update_account(account_id, _update_fields(request))
    if account is None:
        raise NotFoundError("account", account_id)
    return AccountResponse.model_validate(account)


@router.get(
    "/accounts/{account_id}/payments",
    response_model=PaymentListResponse,
    responses=_NOT_FOUND,
)
async def list_account_payments(
    account_id: int,
    page: PageParams = Depends(get_page_params),
    manager: PaymentTransactionManager = Depends(get_payment_manager),
) -> PaymentListResponse:
    """Payments that debited this account."""
    payments, total = await manager.list_for_account(
        account_id, page=page.page, limit=page.limit
    )
    return PaymentListResponse(
        payments=[PaymentResponse.model_validate(p) for p in payments],
        **page.envelope(total),
    )


@router.get(
    "/accounts/{account_id}/receipts",
    response_model=ReceiptListResponse,
    responses=_NOT_FOUND,
)
async def list_account_receipts(
    account_id: int,
    page: PageParams = Depends(get_page_params),
    manager: ReceiptTransactionManager = Depends(get_receipt_manager),
) -> ReceiptListResponse:
    """Receipts that credited this account."""
    receipts, total = await manager.list_for_account(
        account_id, page=page.page, limit=page.limit
    )
    return ReceiptListResponse(
        receipts=[ReceiptResponse.model_validate(r) for r in receipts],
        **page.envelope(total),
    )
