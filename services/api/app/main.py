"""Canteen ordering API service entrypoint."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.api.app.db.init_db import init_db
from services.api.app.logging_config import get_logger, setup_logging
from services.api.app.routers.audit import router as audit_router
from services.api.app.routers.menu import router as menu_router
from services.api.app.routers.order import router as order_router

setup_logging()
log = get_logger(__name__)

app = FastAPI(title="Canteen Ordering API")

app.include_router(order_router)
app.include_router(menu_router)
app.include_router(audit_router)


@app.on_event("startup")
def _startup() -> None:
    log.info("Canteen API starting")
    init_db()


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    del request
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def _request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    del request
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    log.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal Server Error"},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
