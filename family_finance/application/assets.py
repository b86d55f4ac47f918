"""
Asset / liability ledger and investment holdings
"""
import logging
from datetime import date, datetime
from decimal import Decimal

from family_finance.application.transactions import as_datetime
from family_finance.domain.allocation import ASSET_TYPES, INVESTMENT_TYPES
from family_finance.infrastructure.db.models import Asset, Investment, new_id
from family_finance.infrastructure.storage import FinanceStorage
from family_finance.utils.validation import parse_amount

logger = logging.getLogger(__name__)


class AssetValidationError(ValueError):
    """Invalid asset, liability or investment input"""
    pass


def _amount(value, field: str, max_decimal_places: int = 2) -> Decimal:
    try:
        return parse_amount(value, max_decimal_places)
    except ValueError as e:
        raise AssetValidationError(f"{field}: {e}")


class SaveAssetUseCase:
    """
    Use case: create or update an asset/liability entry

    Liabilities are stored as positive amounts; the sign is applied when
    net worth is computed.
    """

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(
        self,
        name: str,
        amount,
        asset_type: str,
        category: str = "other",
        asset_id: str | None = None,
    ) -> Asset:
        name = (name or "").strip()
        if not name:
            raise AssetValidationError("Name is required")
        if asset_type not in ASSET_TYPES:
            raise AssetValidationError(f"Unknown type: {asset_type}")
        value = _amount(amount, "Amount")
        if value < 0:
            raise AssetValidationError("Amount cannot be negative")

        if asset_id is None:
            asset = Asset(id=new_id())
        else:
            asset = self.storage.get_asset(asset_id)
            if asset is None:
                raise AssetValidationError("Item not found")

        asset.name = name
        asset.amount = value
        asset.type = asset_type
        asset.category = (category or "other").strip() or "other"
        asset.last_updated = datetime.now()

        self.storage.save_asset(asset)
        logger.info("Saved %s %s for account_id=%s", asset_type, asset.id, self.storage.account_id)
        return asset


class DeleteAssetUseCase:

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, asset_id: str) -> None:
        if not self.storage.delete_asset(asset_id):
            raise AssetValidationError("Item not found")


class SaveInvestmentUseCase:
    """Use case: create or update an investment holding"""

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(
        self,
        name: str,
        investment_type: str,
        units,
        purchase_price,
        current_price,
        purchase_date: date | datetime | None = None,
        notes: str | None = None,
        investment_id: str | None = None,
    ) -> Investment:
        name = (name or "").strip()
        if not name:
            raise AssetValidationError("Investment name is required")
        if investment_type not in INVESTMENT_TYPES:
            raise AssetValidationError(f"Unknown investment type: {investment_type}")

        units = _amount(units, "Units", max_decimal_places=4)
        if units <= 0:
            raise AssetValidationError("Valid number of units is required")
        purchase_price = _amount(purchase_price, "Purchase price", max_decimal_places=4)
        if purchase_price <= 0:
            raise AssetValidationError("Valid purchase price is required")
        current_price = _amount(current_price, "Current price", max_decimal_places=4)
        if current_price <= 0:
            raise AssetValidationError("Valid current price is required")

        if investment_id is None:
            investment = Investment(id=new_id(), purchase_date=as_datetime(purchase_date))
        else:
            investment = self.storage.get_investment(investment_id)
            if investment is None:
                raise AssetValidationError("Investment not found")
            if purchase_date is not None:
                investment.purchase_date = as_datetime(purchase_date)

        investment.name = name
        investment.type = investment_type
        investment.units = units
        investment.purchase_price = purchase_price
        investment.current_price = current_price
        investment.notes = (notes or "").strip() or None
        investment.last_updated = datetime.now()

        self.storage.save_investment(investment)
        logger.info("Saved investment %s for account_id=%s", investment.id, self.storage.account_id)
        return investment


class DeleteInvestmentUseCase:

    def __init__(self, storage: FinanceStorage):
        self.storage = storage

    def execute(self, investment_id: str) -> None:
        if not self.storage.delete_investment(investment_id):
            raise AssetValidationError("Investment not found")
