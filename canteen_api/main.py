"""
main.py – FastAPI app entry point (slim wire-up only).
Connects routes, lifespan and error translation. No business logic here.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.security import hash_password
from .deps import get_store
from .routes import admin, auth, events, menus, orders, staff, system

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    store.create_schema()
    if settings.seed_demo_data and store.is_empty():
        logger.info("Seeding demo canteens, accounts and menu…")
        store.seed(hash_password)
    logger.info("Ready.")
    yield
    logger.info("Shutdown.")


app = FastAPI(
    title="Campus Canteen API",
    description="Menus, pre-paid orders with pickup tokens, staff queues and admin analytics.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(CORSMiddleware, allow_origins=settings.cors_origins, allow_methods=["*"], allow_headers=["*"])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        problems.append(f"{field}: {err.get('msg', 'invalid')}")
    return JSONResponse(status_code=400, content={"detail": "; ".join(problems) or "Invalid request"})


app.include_router(system.router)
app.include_router(auth.router)
app.include_router(menus.router)
app.include_router(orders.router)
app.include_router(staff.router)
app.include_router(admin.router)
app.include_router(events.router)
