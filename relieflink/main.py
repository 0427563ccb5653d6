"""
ReliefLink API. Run with: uvicorn relieflink.main:app --reload
"""
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from relieflink.api import triage
from relieflink.observability import configure_logging, setup_langsmith_tracing

app = FastAPI(
    title="ReliefLink",
    description="Emergency message triage: AI extraction, urgency scoring and nearest-resource matching",
    version="0.1.0"
)


@app.on_event("startup")
def on_startup():
    configure_logging()
    # Trace Gemini extraction calls in LangSmith when a key is configured
    setup_langsmith_tracing()


# Register routers
app.include_router(triage.router, prefix="/api", tags=["Triage"])


@app.get("/")
async def root():
    return {"message": "Welcome to ReliefLink", "status": "healthy"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies (e.g. messages not a list of strings) are client errors."""
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid input format",
            "message": "Invalid input format",
            "error": "invalid_input",
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Ensure all errors return JSON so the UI can display them."""
    if isinstance(exc, HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc),
            "error": "internal_error",
        },
    )
