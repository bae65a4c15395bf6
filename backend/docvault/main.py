# backend/docvault/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import documents_router, roles_router, users_router
from .config import settings
from .database import init_db
from .errors import DocVaultError, Internal
from .utils.logging import api_logger

# Create all tables and system roles on startup
init_db()

app = FastAPI(title="DocVault API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users_router)
app.include_router(documents_router)
app.include_router(roles_router)


@app.exception_handler(DocVaultError)
async def handle_docvault_error(request: Request, exc: DocVaultError):
    api_logger.warning("Request failed", extra={
        "path": request.url.path,
        "method": request.method,
        "status_code": exc.status_code,
        "error": exc.message
    })
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = [
        {"path": ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0]), "message": err["msg"]}
        for err in exc.errors()
    ]
    api_logger.warning("Request validation failed", extra={
        "path": request.url.path,
        "errors": errors
    })
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": errors[0]["message"], "errorArray": errors}
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    api_logger.error("Unhandled error", extra={
        "path": request.url.path,
        "method": request.method,
        "error": str(exc)
    }, exc_info=exc)
    error = Internal()
    return JSONResponse(status_code=error.status_code, content=error.to_body())


@app.get("/")
async def root():
    return {"message": "DocVault API is running"}
