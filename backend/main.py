# backend/main.py
import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from config import settings
from database import SessionLocal, init_db
from services.alerts import alert_scan_loop
from services.controller import PosController
from services.errors import PosError
from services.storage import CollectionStore

# Router imports
from routes.auth import router as auth_router
from routes.flowers import router as flowers_router
from routes.cart import router as cart_router
from routes.shifts import router as shifts_router
from routes.sales import router as sales_router
from routes.alerts import router as alerts_router
from routes.reports import router as reports_router
from routes.logs import router as logs_router

logger = logging.getLogger(__name__)

# Initialization
init_db()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.controller = PosController(
        store=CollectionStore(SessionLocal),
        username=settings.POS_USERNAME,
        password=settings.POS_PASSWORD,
        alert_cap=settings.ALERT_CAP,
    )
    # Periodic low-stock / decay scan
    scanner = asyncio.create_task(alert_scan_loop(app.state.controller, settings.ALERT_SCAN_INTERVAL_SECONDS))
    logger.info("Alert scan every %s s", settings.ALERT_SCAN_INTERVAL_SECONDS)
    try:
        yield
    finally:
        scanner.cancel()
        with suppress(asyncio.CancelledError):
            await scanner


app = FastAPI(title="BloomPOS API", version="1.0.0", lifespan=lifespan)


# Rejected operations leave state untouched and report why
@app.exception_handler(PosError)
async def pos_error_handler(request: Request, exc: PosError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Router registration
app.include_router(auth_router)
app.include_router(flowers_router)
app.include_router(cart_router)
app.include_router(shifts_router)
app.include_router(sales_router)
app.include_router(alerts_router)
app.include_router(reports_router)
app.include_router(logs_router)

@app.get("/")
def read_root():
    return {"message": "BloomPOS API is running"}
