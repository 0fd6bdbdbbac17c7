# The module provides the FastAPI application that serves as the entry point for the assistant server.
# Date: 2026-10-19
# Version: 0.2.0

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from assistant.api.v1.api import api_router
from assistant.utils.logger import console

app = FastAPI(
    title="Assistant Orchestrator",
    version="0.2.0",
    description="Tool-calling chat orchestrator for a personal assistant.",
)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    console.warning(f"Rejected malformed request to {request.url.path}")
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": str(exc.errors())})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    console.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error", "details": str(exc)})


@app.get("/", summary="Health Check", tags=["Status"])
def read_root():
    """Root endpoint to check if the service is alive."""
    console.info("Health check endpoint was hit.")
    return {"message": "Assistant server is alive and running!"}

# Include the v1 router with a global '/v1' prefix
app.include_router(api_router, prefix="/v1")
