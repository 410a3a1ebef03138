"""Bookstore API router: books, customers and orders.

Demonstrates the standard router pattern:
- List/create endpoints for books and customers
- Order placement with reference lookups
- Repository injection via FastAPI Depends
- Store errors mapped to ``{"message": ...}`` responses
"""

import logging
from typing import Optional

from bson.errors import InvalidId
from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from verticals.bookstore.models.documents import Book, Customer
from verticals.bookstore.models.schemas import BookCreate, CustomerCreate, OrderCreate
from verticals.bookstore.repository import (
    BookOrCustomerNotFound,
    BookRepository,
    CustomerRepository,
    OrderRepository,
    get_book_repository,
    get_customer_repository,
    get_order_repository,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Book Endpoints
# ============================================================================

@router.get("/books")
async def list_books(repo: BookRepository = Depends(get_book_repository)):
    """List every book."""
    try:
        return await repo.list_all()
    except PyMongoError as exc:
        logger.error("Failed to list books: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/books")
async def create_book(
    request: Optional[BookCreate] = None,
    repo: BookRepository = Depends(get_book_repository),
):
    """Add a new book to the catalog. An empty body stores an empty record."""
    request = request or BookCreate()
    try:
        return await repo.create(Book(**request.model_dump()))
    except PyMongoError as exc:
        logger.error("Failed to create book: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


# ============================================================================
# Customer Endpoints
# ============================================================================

@router.get("/customers")
async def list_customers(
    repo: CustomerRepository = Depends(get_customer_repository),
):
    """List every customer."""
    try:
        return await repo.list_all()
    except PyMongoError as exc:
        logger.error("Failed to list customers: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/customers")
async def create_customer(
    request: Optional[CustomerCreate] = None,
    repo: CustomerRepository = Depends(get_customer_repository),
):
    """Register a new customer. Duplicate emails are accepted."""
    request = request or CustomerCreate()
    try:
        return await repo.create(Customer(**request.model_dump()))
    except PyMongoError as exc:
        logger.error("Failed to create customer: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


# ============================================================================
# Order Endpoint
# ============================================================================

@router.post("/orders")
async def create_order(
    request: Optional[OrderCreate] = None,
    repo: OrderRepository = Depends(get_order_repository),
):
    """Record a book purchase by a customer.

    404 when either reference is missing; malformed ids and store
    errors are 400.
    """
    request = request or OrderCreate()
    try:
        return await repo.place(
            book_id=request.bookId,
            customer_id=request.customerId,
            quantity=request.quantity,
        )
    except BookOrCustomerNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    except (InvalidId, ValidationError, PyMongoError) as exc:
        logger.error("Failed to create order: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
