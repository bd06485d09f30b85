from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router
from app.core import get_logger, settings
from app.core.exceptions import AuditCapacityError, AuditSessionNotFoundError
from app.services import check_groq_health, get_container

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Iniciando Supply Chain Auditor [{settings.app_env}]")
    yield
    await get_container().sessions.shutdown()
    logger.info("Cerrando Supply Chain Auditor")


app = FastAPI(
    title="Supply Chain Compliance Auditor",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuditSessionNotFoundError)
async def session_not_found_handler(request: Request, exc: AuditSessionNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(AuditCapacityError)
async def capacity_handler(request: Request, exc: AuditCapacityError):
    logger.warning(f"Audit rejected: {exc.message}")
    return JSONResponse(status_code=status.HTTP_429_TOO_MANY_REQUESTS, content={"detail": exc.message})


# Exception handler global
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Routes
app.include_router(router, prefix="/api")


@app.get("/health")
async def health_check():
    groq_ok = await check_groq_health()
    return {
        "status": "ok" if groq_ok else "degraded",
        "env": settings.app_env,
        "groq": "reachable" if groq_ok else "unreachable",
    }
