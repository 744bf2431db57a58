import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from portal.api.admin import router as admin_router
from portal.api.auth import router as auth_router
from portal.api.users import router as users_router
from portal.auth import hash_password
from portal.config import settings
from portal.database import engine, init_db
from portal.errors import ConflictError, InternalError, PortalError
from portal.services.user_repository import UserRepository

logger = logging.getLogger(__name__)


def bootstrap_admin(session: Session) -> None:
    username = settings.bootstrap_admin_username
    password = settings.bootstrap_admin_password
    if not username or not password:
        return
    users = UserRepository(session)
    if users.get_by_username(username):
        return
    try:
        users.create_admin(
            {
                "username": username,
                "password": hash_password(password),
                "full_name": settings.bootstrap_admin_full_name,
            }
        )
    except ConflictError as exc:
        logger.warning(f"Bootstrap admin {username!r} not created: {exc.message}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    init_db()
    with Session(engine) as session:
        bootstrap_admin(session)
    yield


app = FastAPI(title="Moderator Portal", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # The rejected input is not echoed back; it may not even be encodable.
    detail = [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(detail)})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Store failure on {request.method} {request.url.path}", exc_info=exc)
    return await portal_error_handler(request, InternalError())


app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(admin_router, prefix="/api")


@app.get("/health")
async def health():
    return {"status": "ok"}
