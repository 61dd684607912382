from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time
import uvicorn

from config import settings
from database import create_db_and_tables, engine
from auth.router import router as users_router
from account.router import router as account_router
from urls.router import router as urls_router
from api_responses import envelope
from api_responses.errors import register_exception_handlers

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger('app')


@asynccontextmanager
async def lifespan(application: FastAPI):
    await create_db_and_tables()
    logger.info("Startup complete")
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(title="URL Shortener", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


register_exception_handlers(app)

app.include_router(urls_router, prefix=settings.api_prefix)
app.include_router(account_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return envelope(200, {}, "App healthy")


if __name__ == "__main__":
    uvicorn.run("main:app", reload=False, host=settings.app_host, port=settings.app_port, log_level="info")
