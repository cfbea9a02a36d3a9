"""Catalog read endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from bookstore.application.show_books import ListBooksHandler, ShowBookHandler
from bookstore.infrastructure.api.dependencies import UoW
from bookstore.infrastructure.api.schemas import (
    BookPageResponse,
    BookResponse,
    PaginationSchema,
    book_response,
)

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=BookPageResponse)
def list_books(uow: UoW, page: int = 1, limit: int = 12) -> BookPageResponse:
    books, total, total_pages = ListBooksHandler(uow).handle(page=page, limit=limit)
    return BookPageResponse(
        books=[book_response(b) for b in books],
        pagination=PaginationSchema(
            page=page, limit=limit, total=total, total_pages=total_pages
        ),
    )


@router.get("/{book_id}", response_model=BookResponse)
def get_book(book_id: str, uow: UoW) -> BookResponse:
    return book_response(ShowBookHandler(uow).handle(book_id))
