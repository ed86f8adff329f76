from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from errors import AppError, InternalError, ValidationError
from routes import products, session

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Product List API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(error: AppError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # Unparseable JSON body answers 500, like any other body parse failure
    if any(err.get("type") == "json_invalid" for err in errors):
        logger.warning("Unparseable JSON body on %s %s", request.method, request.url.path)
        return _error_response(InternalError())

    first = errors[0] if errors else {}
    field = next((str(part) for part in first.get("loc", ()) if part != "body"), "")
    message = f"Invalid {field}" if field else "Invalid request body"
    return _error_response(ValidationError(message))


@app.middleware("http")
async def internal_error_boundary(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(InternalError())


app.include_router(session.router, prefix=config.API_PREFIX)
app.include_router(products.router, prefix=config.API_PREFIX)


@app.get("/")
def health():
    return {"status": "ok", "service": "product-list"}
