"""Sale Transaction Manager: sales remove stock, deleting one returns it."""

from src.application.use_cases.trade_transactions import TradeTransactionManager
from src.core.entities.inventory import StockTransactionType
from src.core.entities.trade import Sale, SaleItem
from src.core.interfaces.storage import ITradeStore


class SaleTransactionManager(TradeTransactionManager):
    """
    Create, edit and delete sales together with their stock movements.

    Each line's stock-out is a guarded row update, so selling more than is on
    hand raises InsufficientStockError and rolls back the whole sale. Lines
    for the same item are checked cumulatively.
    """

    entity = "sale"
    tx_type = StockTransactionType.SALE
    party_entity = "customer"
    party_field = "customer_id"
    settled_field = "received_amount"
    doc_model = Sale
    line_model = SaleItem

    async def _resolve_store(self) -> ITradeStore:
        from src.infrastructure.storage.sqlite import get_sale_store

        return await get_sale_store()
