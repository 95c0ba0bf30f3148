"""Purchase Transaction Manager: purchases add stock, deleting one takes it back."""

from src.application.use_cases.trade_transactions import TradeTransactionManager
from src.core.entities.inventory import StockTransactionType
from src.core.entities.trade import Purchase, PurchaseItem
from src.core.interfaces.storage import ITradeStore


class PurchaseTransactionManager(TradeTransactionManager):
    """Create, edit and delete purchases together with their stock movements."""

    entity = "purchase"
    tx_type = StockTransactionType.PURCHASE
    party_entity = "supplier"
    party_field = "supplier_id"
    settled_field = "paid_amount"
    doc_model = Purchase
    line_model = PurchaseItem

    async def _resolve_store(self) -> ITradeStore:
        from src.infrastructure.storage.sqlite import get_purchase_store

        return await get_purchase_store()
