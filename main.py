import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from config import Settings
from database import connect, create_document, ensure_indexes
from routes import auth, customers, genres, movies, rentals, returns, users
from schemas import User
from security import hash_password
from validation import request_validation_exception_handler

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def ensure_admin_exists(db: Database, settings: Settings) -> None:
    # Create the configured admin if it is missing
    if not settings.admin_email or not settings.admin_password:
        return
    if db["user"].count_documents({"email": settings.admin_email}) == 0:
        admin = User(
            name=settings.admin_name,
            email=settings.admin_email,
            password=hash_password(settings.admin_password),
            is_admin=True,
        )
        create_document(db, "user", admin)
        logger.info("Created bootstrap admin %s", settings.admin_email)


async def duplicate_key_exception_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    key = ", ".join((exc.details or {}).get("keyValue", {}).keys()) or "key"
    return JSONResponse(status_code=400, content={"detail": f"A record with this {key} already exists."})


async def connection_failure_exception_handler(request: Request, exc: ConnectionFailure) -> JSONResponse:
    logger.error("Database not available: %s", exc)
    return JSONResponse(status_code=503, content={"detail": "Database not available."})


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)

    app = FastAPI(title="Vidly API")
    app.state.settings = settings
    app.state.db = db if db is not None else connect(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-auth-token"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_exception_handler)
    app.add_exception_handler(ConnectionFailure, connection_failure_exception_handler)

    for module in (auth, users, genres, customers, movies, rentals, returns):
        app.include_router(module.router)

    @app.on_event("startup")
    def prepare_database():
        ensure_indexes(app.state.db)
        ensure_admin_exists(app.state.db, settings)
        logger.info("Vidly API ready on database %s", settings.database_name)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
