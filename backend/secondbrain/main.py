# FILE: backend/secondbrain/main.py
# 1. Router registration under /api/v1 (user, content, link, tag).
# 2. One set of exception handlers renders every failure in the standard envelope.

from fastapi import FastAPI, Request, status, APIRouter
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from pymongo.errors import DuplicateKeyError
from bson.errors import InvalidId
import logging

from secondbrain.core.config import settings
from secondbrain.core.errors import AppError
from secondbrain.core.lifespan import lifespan
from secondbrain.core.responses import send_response

# --- Router Imports ---
from secondbrain.api.endpoints.auth import router as auth_router
from secondbrain.api.endpoints.content import router as content_router
from secondbrain.api.endpoints.link import router as link_router
from secondbrain.api.endpoints.tags import router as tags_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Second Brain API", lifespan=lifespan)

# --- MIDDLEWARE ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- EXCEPTION HANDLERS ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return send_response(exc.status_code, False, exc.message, exc.data)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    response = send_response(exc.status_code, False, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages, errors = [], []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
        errors.append({"field": field, "message": err.get("msg"), "type": err.get("type")})
    return send_response(status.HTTP_400_BAD_REQUEST, False, ", ".join(messages), error=errors)

@app.exception_handler(DuplicateKeyError)
async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    key_value = (exc.details or {}).get("keyValue") or {}
    detail = ", ".join(f"{k}: {v}" for k, v in key_value.items())
    message = f"Duplicate key error: {detail}" if detail else "Duplicate key error"
    return send_response(status.HTTP_400_BAD_REQUEST, False, message)

@app.exception_handler(InvalidId)
async def invalid_id_handler(request: Request, exc: InvalidId):
    return send_response(status.HTTP_400_BAD_REQUEST, False, f"Invalid format: {exc}")

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    message = str(exc) if settings.ENVIRONMENT == "development" else "Internal Server Error"
    return send_response(status.HTTP_500_INTERNAL_SERVER_ERROR, False, message)

# --- V1 ROUTER ASSEMBLY ---
api_v1_router = APIRouter(prefix=settings.API_V1_STR)

api_v1_router.include_router(auth_router, prefix="/user")
api_v1_router.include_router(content_router, prefix="/content")
api_v1_router.include_router(link_router, prefix="/link")
api_v1_router.include_router(tags_router, prefix="/tag")

app.include_router(api_v1_router)

@app.get("/health", status_code=status.HTTP_200_OK, tags=["Health Check"])
def health_check():
    return {"status": "ok", "version": "1.0.0"}
