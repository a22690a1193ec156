import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

import database
from bot import FinanceBot, build_application, start_polling, stop_polling
from database import DatabaseUnavailable, RecordStore, get_store
from schemas import Dashboard, FinancialRecord
from services import DashboardService, ScanningBalanceProvider
from settings import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# -----------------------------
# Startup / shutdown
# -----------------------------

async def start_bot(store: RecordStore):
    if not settings.TELEGRAM_BOT_TOKEN:
        logger.warning("TELEGRAM_BOT_TOKEN not set, Telegram bot disabled")
        return None
    finance_bot = FinanceBot(store, ScanningBalanceProvider(store))
    telegram_app = build_application(settings.TELEGRAM_BOT_TOKEN, finance_bot)
    try:
        await start_polling(telegram_app)
    except Exception:
        logger.exception("Telegram bot failed to start")
        return None
    return telegram_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    telegram_app = None
    if database.db is None:
        logger.warning("DATABASE_URL/DATABASE_NAME not set, running without a database")
    else:
        store = RecordStore(database.db)
        try:
            store.ensure_indexes()
            logger.info("Database connected: %s", settings.DATABASE_NAME)
        except PyMongoError:
            logger.exception("Database unreachable at startup, requests will fail until it is back")
        telegram_app = await start_bot(store)
    logger.info("Dashboard data: http://localhost:%s/api/transactions/dashboard", settings.PORT)
    yield
    if telegram_app is not None:
        await stop_polling(telegram_app)


app = FastAPI(title="Finance Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(e: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(e)})


@app.exception_handler(DatabaseUnavailable)
async def database_unavailable(request, exc: DatabaseUnavailable):
    return error_response(exc)


# -----------------------------
# Base routes
# -----------------------------
@app.get("/")
def root():
    return {"message": "Finance Tracker API is running"}


@app.get("/api/health")
def health():
    return {"status": "OK", "message": "Server is running"}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": "✅ Set" if settings.DATABASE_URL else "❌ Not Set",
        "database_name": "✅ Set" if settings.DATABASE_NAME else "❌ Not Set",
        "connection_status": "Not Connected",
        "collections": [],
    }
    if database.db is None:
        return response
    try:
        RecordStore(database.db).ping()
        response["collections"] = database.db.list_collection_names()
        response["connection_status"] = "Connected"
        response["database"] = "✅ Connected & Working"
    except Exception as e:
        response["database"] = f"⚠️ Connected but error: {str(e)[:80]}"
    return response


# -----------------------------
# Transactions
# -----------------------------
@app.get("/api/transactions", response_model=List[FinancialRecord])
def list_transactions(store: RecordStore = Depends(get_store)):
    try:
        return store.list_all()
    except Exception as e:
        logger.exception("Error listing transactions")
        return error_response(e)


@app.get("/api/transactions/dashboard", response_model=Dashboard)
def dashboard(store: RecordStore = Depends(get_store)):
    try:
        return DashboardService(store).compute_dashboard()
    except Exception as e:
        logger.exception("Error in dashboard")
        return error_response(e)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
