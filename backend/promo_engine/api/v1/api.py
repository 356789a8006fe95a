from fastapi import APIRouter
from promo_engine.api.v1.endpoints import (
    promo_codes,
    loyalty,
)

api_router = APIRouter()
api_router.include_router(promo_codes.router, prefix="/promo-codes", tags=["promo-codes"])
api_router.include_router(loyalty.router, prefix="/loyalty", tags=["loyalty"])
