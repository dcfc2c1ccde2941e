import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

# Import models for table creation
from app.core import models  # noqa: F401
from app.core.config import settings
from app.domains.collections.router import router as collections_router
from app.domains.nfts.router import router as nfts_router
from app.domains.users.router import router as users_router
from app.shared.database.connection import Base, engine, get_db
from app.shared.errors import DomainError

logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
    )

    @application.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @application.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(f"Unhandled database error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Database error"},
        )

    @application.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"Invalid request: {details}"},
        )

    # Include routers
    application.include_router(users_router, prefix="/api/v1")
    application.include_router(collections_router, prefix="/api/v1")
    application.include_router(nfts_router, prefix="/api/v1")

    @application.get("/")
    async def root() -> dict[str, str]:
        return {"message": "Welcome to the NFT marketplace"}

    @application.get("/health")
    async def health_check(db: Session = Depends(get_db)) -> dict[str, str]:
        try:
            # Test database connection
            db.execute(text("SELECT 1"))
            return {
                "status": "healthy",
                "environment": settings.node_env,
                "database": "connected",
            }
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return {
                "status": "unhealthy",
                "environment": settings.node_env,
                "database": "disconnected",
                "error": str(e),
            }

    return application


app = create_app()
