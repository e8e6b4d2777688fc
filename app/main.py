import time
from fastapi import FastAPI, Request

from routers.router import router
from core.lifespan import lifespan
from core.config import settings
from core.logger import logger

# Initialize FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Publishes the pipeline-built Lambda layer into one region per job and
    grants usage permission on the new version.

    ## Endpoints

    **POST /api/v1/jobs** - Run one CodePipeline distribute job and report its result

    **POST /api/v1/distributions** - Distribute an artifact to several regions in parallel
    (local runs; nothing is reported to CodePipeline)

    **GET /api/v1/health** - Liveness and configuration summary
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Request/Response logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    log_data = {
        "method": request.method,
        "path": request.url.path,
        "status_code": response.status_code,
        "duration_ms": int(duration * 1000),
        "client": request.client.host if request.client else "unknown"
    }

    # Only log non-health-check requests
    if not request.url.path.endswith("/health"):
        logger.info(f"Request: {log_data}")

    return response

# Include routers
app.include_router(router)

# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    return {
        "service": settings.PROJECT_NAME,
        "version": "1.0.0",
        "status": "running",
        "documentation": "/docs"
    }
