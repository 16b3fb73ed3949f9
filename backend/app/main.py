from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.db import Base, engine
from app.core.errors import AppError
from app.core.logger import Logger
from app.routers.auth_router import router as auth_router
from app.routers.orders_router import router as orders_router
from app.routers.products_router import router as products_router

# Import models so Base.metadata knows them
import app.models  # noqa

logger = Logger.get_logger(__name__)

app = FastAPI(title="StoreTrack Admin API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=600,
)


# Create tables (no migrations)
Base.metadata.create_all(bind=engine)


@app.exception_handler(AppError)
def handle_app_error(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = []
    for issue in exc.errors():
        # drop the "body"/"query"/"path" prefix
        field = ".".join(str(part) for part in issue["loc"][1:]) or str(issue["loc"][0])
        errors.append(f"{field} is invalid: {issue['msg']}")
    return JSONResponse(status_code=400, content={"error": "Invalid request.", "errors": errors})


@app.exception_handler(SQLAlchemyError)
def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Store failure on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal Server Error."})


@app.get("/")
def health():
    return {"status": "ok"}


app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(products_router, prefix="/products", tags=["products"])
app.include_router(orders_router, prefix="/orders", tags=["orders"])
