"""
FastAPI dependencies (DB session, account-scoped storage)
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from family_finance.config import get_settings
from family_finance.infrastructure.db.session import get_db as _get_db
from family_finance.infrastructure.storage import FinanceStorage


# Re-export get_db so tests can override a single dependency
get_db = _get_db


def get_storage(db: Session = Depends(get_db)) -> FinanceStorage:
    """
    Storage scoped to the configured account

    Usage:
        @router.get("/savings")
        def savings(storage: FinanceStorage = Depends(get_storage)):
            ...
    """
    return FinanceStorage(db, get_settings().ACCOUNT_ID)
