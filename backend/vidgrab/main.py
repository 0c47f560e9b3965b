"""Main application entry point"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import CORS_ORIGINS, LOG_LEVEL
from .errors import VidgrabError
from .routers import api

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title="Video Downloader API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VidgrabError)
async def vidgrab_error_handler(request: Request, exc: VidgrabError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = "body"
    if errors:
        # loc is ("body" | "query", <field>, ...)
        field = ".".join(str(part) for part in errors[0].get("loc", ())[1:]) or field
    logger.info("Rejected request to %s: %s", request.url.path, errors)
    return JSONResponse(status_code=400, content={"error": f"Invalid request field: {field}"})


# Include routers
app.include_router(api.router)


if __name__ == "__main__":
    import uvicorn
    from .config import API_HOST, API_PORT
    uvicorn.run(app, host=API_HOST, port=API_PORT)
