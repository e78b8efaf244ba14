from contextlib import asynccontextmanager

from fastapi import FastAPI

from selfsight.api.endpoints import functions_router, router
from selfsight.core.config import settings
from selfsight.services.http_client import http_client_manager
from selfsight.shared.correlation import CorrelationMiddleware
from selfsight.shared.errors import register_exception_handlers
from selfsight.shared.logging_config import setup_logging

setup_logging(settings.SERVICE_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await http_client_manager.startup()
    yield
    await http_client_manager.shutdown()


app = FastAPI(
    title="SelfSight Journal Service",
    description="Journaling, entry analysis and personal insights for SelfSight",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationMiddleware)
register_exception_handlers(app)

app.include_router(router, prefix="/api/v1")
app.include_router(functions_router, prefix="/functions/v1")


@app.get("/")
async def root():
    return {"message": "SelfSight Journal Service Running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
