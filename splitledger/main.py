import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from splitledger.api.v1.routes.expense import router as expense_router
from splitledger.api.v1.routes.group import router as group_router
from splitledger.api.v1.routes.settlement import router as settlement_router
from splitledger.api.v1.routes.system import router as system_router
from splitledger.api.v1.routes.user import router as user_router
from splitledger.core.config import settings
from splitledger.core.db_check import create_schema, wait_for_db
from splitledger.core.exceptions import NotFoundError, ValidationError
from splitledger.core.log_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    await wait_for_db()
    if settings.CREATE_SCHEMA:
        await create_schema()
    yield


app = FastAPI(title="Split Ledger", lifespan=lifespan)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(SQLAlchemyError)
async def data_access_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Data access error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Data store unavailable"})


@app.get("/")
async def root():
    return {"message": "Split Ledger is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(user_router, prefix="/api/v1/users")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(expense_router, prefix="/api/v1/expenses")
app.include_router(settlement_router, prefix="/api/v1/settlements")
