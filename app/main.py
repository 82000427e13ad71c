from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.core.config import settings
from app.core.db_check import wait_for_db
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import configure_logging
from app.api.v1.routes.system import router as system_router
from app.api.v1.routes.group import router as group_router
from app.api.v1.routes.expense import router as expense_router
from app.api.v1.routes.settlement import router as settlement_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await wait_for_db()
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
register_exception_handlers(app)

@app.get("/")
async def root():
    return {"message": f"{settings.APP_NAME} is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(expense_router, prefix="/api/v1/expenses")
app.include_router(settlement_router, prefix="/api/v1/settlements")
