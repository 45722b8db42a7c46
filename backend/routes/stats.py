# backend/routes/stats.py
from fastapi import APIRouter, Depends

from schemas.stats import OrderStats
from storage import DatabaseStorage, get_storage
from utils.tokenJWT import require_admin

router = APIRouter(
    prefix="/api/admin",
    tags=["Stats"]
)

# === Dashboard Summary ===

@router.get("/stats", response_model=OrderStats, dependencies=[Depends(require_admin)])
def get_stats_summary(store: DatabaseStorage = Depends(get_storage)):
    return store.get_order_stats()
