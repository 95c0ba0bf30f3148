"""Integration tests: payments and receipts moving account balances."""

from datetime import date

import pytest

from src.application.dto.requests import (
    CreatePaymentRequest,
    CreatePurchaseRequest,
    CreateReceiptRequest,
    CreateSaleRequest,
    TradeLineRequest,
    UpdateCashMovementRequest,
)
from src.application.use_cases import (
    CreditReporter,
    PaymentTransactionManager,
    PurchaseTransactionManager,
    ReceiptTransactionManager,
    SaleTransactionManager,
)
from src.core.entities import Account, Customer, Supplier
from src.core.entities.report import SettlementStatus
from src.core.exceptions import NotFoundError

pytestmark = pytest.mark.integration


async def balance_of(catalog, account: Account) -> float:
    return (await catalog.get_account(account.id)).balance


def pay(supplier: Supplier, amount: float, account: Account | None, day: date):
    return CreatePaymentRequest(
        supplier_id=supplier.id,
        amount=amount,
        method="account" if account else "cash",
        account_id=account.id if account else None,
        date=day,
    )


def receive(customer: Customer, amount: float, account: Account | None, day: date):
    return CreateReceiptRequest(
        customer_id=customer.id,
        amount=amount,
        method="account" if account else "cash",
        account_id=account.id if account else None,
        date=day,
    )


async def test_balance_conservation(catalog, supplier, customer, account, today):
    payments = PaymentTransactionManager()
    receipts = ReceiptTransactionManager()

    await payments.create(pay(supplier, 300, account, today))
    await payments.create(pay(supplier, 50, None, today))
    await receipts.create(receive(customer, 120, account, today))
    await receipts.create(receive(customer, 80, None, today))

    assert await balance_of(catalog, account) == 1000 - 300 + 120

    summary = await CreditReporter().account_summary(account.id)
    assert summary.payment_count == 1
    assert summary.receipts_total == 120
    assert summary.in_sync


async def test_delete_restores_balance(catalog, supplier, account, today):
    payments = PaymentTransactionManager()
    payment = await payments.create(pay(supplier, 400, account, today))
    assert await balance_of(catalog, account) == 600

    await payments.delete(payment.id)
    assert await balance_of(catalog, account) == 1000

    with pytest.raises(NotFoundError):
        await payments.delete(payment.id)
    assert await balance_of(catalog, account) == 1000


async def test_overdraft_is_allowed(catalog, supplier, account, today):
    await PaymentTransactionManager().create(pay(supplier, 1500, account, today))
    assert await balance_of(catalog, account) == -500


async def test_unknown_account_writes_nothing(catalog, supplier, account, today):
    request = pay(supplier, 10, account, today)
    request.account_id = 404
    payments = PaymentTransactionManager()

    with pytest.raises(NotFoundError):
        await payments.create(request)

    assert await payments.list() == ([], 0)
    assert await balance_of(catalog, account) == 1000


async def test_edit_keeps_amount_and_balance(catalog, customer, account, today):
    receipts = ReceiptTransactionManager()
    receipt = await receipts.create(receive(customer, 75, account, today))

    updated = await receipts.update(
        receipt.id, UpdateCashMovementRequest(date=date(2024, 4, 1), note="moved")
    )

    assert updated.date == date(2024, 4, 1)
    assert updated.note == "moved"
    assert updated.amount == 75
    assert updated.bank_name == "First Bank"
    assert await balance_of(catalog, account) == 1075


async def test_list_for_account(supplier, account, today):
    payments = PaymentTransactionManager()
    await payments.create(pay(supplier, 10, account, today))
    await payments.create(pay(supplier, 20, None, today))

    listed, total = await payments.list_for_account(account.id)
    assert total == 1
    assert listed[0].amount == 10


async def test_outstanding_balances(supplier, customer, item, other_item, account, today):
    await PurchaseTransactionManager().create(CreatePurchaseRequest(
        supplier_id=supplier.id, date=today,
        items=[TradeLineRequest(item_id=item.id, quantity=10, unit_price=5)],
    ))
    await SaleTransactionManager().create(CreateSaleRequest(
        customer_id=customer.id, date=today,
        items=[TradeLineRequest(item_id=other_item.id, quantity=10, unit_price=3.5)],
    ))
    await PaymentTransactionManager().create(pay(supplier, 50, None, today))
    await ReceiptTransactionManager().create(receive(customer, 40, account, today))

    reporter = CreditReporter()
    supplier_balance = await reporter.supplier_balance(supplier.id)
    assert supplier_balance.outstanding_balance == 0
    assert supplier_balance.status is SettlementStatus.SETTLED

    credit = await reporter.customer_credit(customer.id)
    assert credit.total_sales == 35
    assert credit.outstanding_balance == -5
    assert credit.status is SettlementStatus.CREDIT

    daily = await reporter.daily_summary(today)
    assert (daily.purchases, daily.sales, daily.payments, daily.receipts) == (50, 35, 50, 40)

    movements = await reporter.recent_movements(other_item.id)
    assert [m.quantity for m in movements] == [-10]
