"""FastAPI application for IssueTrac"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from issuetrac.api.errors import register_exception_handlers
from issuetrac.api.issues import router as issues_router
from issuetrac.config import is_development
from issuetrac.logging import bind_context, clear_context, configure_logging, get_logger

configure_logging()
logger = get_logger("issuetrac.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database and run migrations on startup"""
    from issuetrac.storage.migrations import initialize_database_async

    await initialize_database_async()
    logger.info("startup_complete")
    yield


# Create FastAPI app
app = FastAPI(
    title="IssueTrac API",
    description="Issue tracker with status lifecycle and one-way archival",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)

# CORS for local frontends in development only
if is_development():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Tag every log line of a request with a request id"""
    clear_context()
    bind_context(request_id=uuid.uuid4().hex[:12], method=request.method, path=request.url.path)
    response = await call_next(request)
    logger.info("request_complete", status_code=response.status_code)
    return response


register_exception_handlers(app)

# Include API routers
app.include_router(issues_router, prefix="/api/v1/issues", tags=["issues"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "issuetrac-api"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8080)
