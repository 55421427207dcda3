"""
API Router.

Aggregates all API endpoints.
"""

from fastapi import APIRouter
from backend.app.api.routes import transactions

router = APIRouter()

# Ledger entries, filters and summaries
router.include_router(transactions.router)
