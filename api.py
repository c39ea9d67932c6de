import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ValidationError

from book import Book
from config import settings, setup_logging
from library import Library

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

STORED_MESSAGE = "Book is stored in Database"
STORED_FORM_MESSAGE = "Book is stored in Database (form submit)"
FAILED_MESSAGE = "Failed to store the book in Database"


# --- Models ---
class BookModel(BaseModel):
    id: int
    title: str
    author: str
    price: float


class BookCreateModel(BaseModel):
    title: str
    author: str
    price: float


class HealthModel(BaseModel):
    status: str
    timestamp: str
    database: bool
    total_books: int


# --- Request decoding ---
def _build_book(data: Any) -> Book:
    """Bind decoded request data to a Book. Binding errors surface as a 422."""
    try:
        payload = BookCreateModel.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e
    return Book(title=payload.title, author=payload.author, price=payload.price)


def book_from_json(payload: Any) -> Book:
    """Build a Book from a decoded JSON body."""
    return _build_book(payload)


def book_from_form(fields: Mapping[str, Any]) -> Book:
    """Build a Book from URL-encoded form fields."""
    return _build_book(dict(fields))


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except json.JSONDecodeError as e:
        raise _json_invalid(e.pos, e.msg) from e
    except UnicodeDecodeError as e:
        raise _json_invalid(e.start, e.reason) from e


def _json_invalid(position: int, reason: str) -> RequestValidationError:
    return RequestValidationError([{
        "type": "json_invalid",
        "loc": ("body", position),
        "msg": "JSON decode error",
        "input": {},
        "ctx": {"error": reason},
    }])


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


# --- Routes ---
def _build_router(library: Library) -> APIRouter:
    router = APIRouter()

    def _store(book: Book, success_message: str) -> PlainTextResponse:
        if library.add_book(book):
            return PlainTextResponse(success_message, status_code=201)
        return PlainTextResponse(FAILED_MESSAGE, status_code=400)

    @router.post("/add", response_class=PlainTextResponse, status_code=201)
    async def create_book(request: Request):
        """Store a book sent either as a JSON body or as form fields."""
        media_type = _media_type(request)
        if media_type == JSON_CONTENT_TYPE:
            return _store(book_from_json(await _read_json(request)), STORED_MESSAGE)
        if media_type == FORM_CONTENT_TYPE:
            form = await request.form()
            return _store(book_from_form(form), STORED_FORM_MESSAGE)

        logger.warning(f"Rejected /add request with content type '{media_type or 'none'}'")
        return PlainTextResponse("Unsupported media type", status_code=415)

    @router.get("/fetch", response_model=List[BookModel])
    def read_books():
        """List every stored book."""
        return [BookModel(**b.to_dict()) for b in library.fetch_books()]

    @router.get("/health", response_model=HealthModel)
    def health():
        """Lightweight health probe; reports database reachability without failing."""
        db_ok = True
        total = 0
        try:
            total = library.count_books()
        except sqlite3.Error:
            logger.warning("Health check could not reach the database")
            db_ok = False
        return HealthModel(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            database=db_ok,
            total_books=total,
        )

    return router


def create_app(library: Optional[Library] = None) -> FastAPI:
    """Build the FastAPI application around the given Library service."""
    setup_logging(settings.log_level)
    if library is None:
        library = Library(db_file=settings.database_file)

    app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)
    app.state.library = library
    app.include_router(_build_router(library))
    return app


app = create_app()
