from fastapi import APIRouter

from selfsight.api.routes import accounts, entries, functions, health, insights, recommendations


router = APIRouter()

router.include_router(accounts.router)
router.include_router(entries.router)
router.include_router(insights.router)
router.include_router(recommendations.router)
router.include_router(health.router)

functions_router = APIRouter()

functions_router.include_router(functions.router)
