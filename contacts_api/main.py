import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.database import Database
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import crud, schemas
from .config import Config, setup_logging
from .database import DatabaseManager, get_db
from .errors import ContactAPIError, PersistenceError, status_for

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"]

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": schemas.ErrorBody},
    status.HTTP_404_NOT_FOUND: {"model": schemas.ErrorBody},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": schemas.ErrorBody},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    db_manager: DatabaseManager = app.state.db_manager
    if not Config.MONGODB_URI:
        logger.warning("MONGODB_URI is not set; database operations will fail")
    else:
        try:
            db_manager.connect()
        except PersistenceError as e:
            logger.error(f"Database connection error: {e.error}")
            logger.warning("The API will start but database operations will fail")

    logger.info(f"Server is listening on port {Config.PORT}")
    logger.info(f"API documentation available at: {Config.SERVER_URL}/api-docs")
    logger.info(f"Health check available at: {Config.SERVER_URL}/health")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    yield
    db_manager.close()


def create_app(db_manager: DatabaseManager | None = None) -> FastAPI:
    app = FastAPI(
        title="Contact API",
        version="1.0.0",
        description="RESTful API for managing contact information stored in MongoDB.",
        contact={"name": "API Support", "email": "support@contactapi.com"},
        servers=[{"url": Config.SERVER_URL, "description": "Main API Server"}],
        docs_url="/api-docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.db_manager = db_manager or DatabaseManager(Config.MONGODB_URI, Config.DATABASE_NAME)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    app.add_exception_handler(ContactAPIError, contact_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    register_routes(app)
    return app


async def contact_error_handler(request: Request, exc: ContactAPIError):
    return JSONResponse(status_code=status_for(exc), content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = schemas.validation_failure(schemas.field_errors(exc.errors()))
    return await contact_error_handler(request, error)


async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code not in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail},
                            headers=getattr(exc, "headers", None))
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": "Route not found",
                 "error": f"The requested route {request.url.path} does not exist"},
    )


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error",
                 "error": str(exc) if Config.is_development() else "Something went wrong"},
    )


def register_routes(app: FastAPI):

    @app.get("/", response_class=PlainTextResponse, tags=["Health Check"])
    def root():
        return "Contact API is running"

    @app.get("/health", tags=["Health Check"])
    def health():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.monotonic() - STARTED_AT,
            "environment": Config.ENVIRONMENT,
        }

    @app.get("/contacts", response_model=list[schemas.Contact], tags=["Contacts"],
             responses=ERROR_RESPONSES)
    def list_contacts(db: Database = Depends(get_db)):
        return crud.get_contacts(db)

    @app.get("/contacts/{id}", response_model=schemas.Contact, tags=["Contacts"],
             responses=ERROR_RESPONSES)
    def read_contact(id: str, db: Database = Depends(get_db)):
        return crud.get_contact(db, id)

    @app.post("/contacts", response_model=schemas.ContactCreated,
              status_code=status.HTTP_201_CREATED, tags=["Contacts"], responses=ERROR_RESPONSES)
    def create_contact(contact: schemas.ContactIn, db: Database = Depends(get_db)):
        contact_id = crud.create_contact(db, contact)
        return {"message": "Contact created successfully", "contactId": contact_id}

    @app.put("/contacts/{id}", response_model=schemas.Message, tags=["Contacts"],
             responses=ERROR_RESPONSES)
    def update_contact(id: str, contact: schemas.ContactIn, db: Database = Depends(get_db)):
        crud.update_contact(db, id, contact)
        return {"message": "Contact updated successfully"}

    @app.delete("/contacts/{id}", response_model=schemas.Message, tags=["Contacts"],
                responses=ERROR_RESPONSES)
    def delete_contact(id: str, db: Database = Depends(get_db)):
        crud.delete_contact(db, id)
        return {"message": "Contact deleted successfully"}

    # CORSMiddleware answers real preflights; this covers OPTIONS without Origin
    @app.options("/{path:path}", include_in_schema=False)
    def options(path: str):
        return PlainTextResponse("OK", headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": ", ".join(CORS_METHODS),
            "Access-Control-Allow-Headers": ", ".join(CORS_HEADERS),
        })


app = create_app()


def run():
    setup_logging()
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)


if __name__ == "__main__":
    run()
