"""Bookstore repositories: async document store access.

Extends BaseRepository with the bookstore collections and the order
placement query, which reads the referenced book and customer before
writing the order.
"""

from fastapi import Depends
from pymongo.asynchronous.database import AsyncDatabase

from core.database import get_database
from patterns.repository import BaseRepository
from verticals.bookstore.models.documents import Book, Customer, Order


class BookOrCustomerNotFound(LookupError):
    """Raised when an order references a book or customer that does not exist."""

    message = "Book or customer not found"

    def __init__(self):
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Book / customer repositories
# ---------------------------------------------------------------------------

class BookRepository(BaseRepository[Book]):
    """Repository for books."""

    model = Book


class CustomerRepository(BaseRepository[Customer]):
    """Repository for customers."""

    model = Customer


# ---------------------------------------------------------------------------
# Order repository
# ---------------------------------------------------------------------------

def compute_total(price, quantity) -> float | None:
    """Multiply price by quantity; a missing operand yields a missing total."""
    if price is None or quantity is None:
        return None
    return price * quantity


class OrderRepository(BaseRepository[Order]):
    """Repository for orders."""

    model = Order

    async def place(
        self, book_id: str | None, customer_id: str | None, quantity: int | None
    ) -> dict:
        """Record a purchase of ``quantity`` copies of a book by a customer.

        Both references are checked at creation time only; nothing guards
        against the book or customer changing before the insert.
        Books carry no declared price, so ``total`` is normally None.
        """
        books = BookRepository(self.database)
        customers = CustomerRepository(self.database)

        book = await books.get(book_id)
        customer = await customers.get(customer_id)
        if not book or not customer:
            raise BookOrCustomerNotFound()

        order = Order(
            book=book["_id"],
            customer=customer["_id"],
            quantity=quantity,
            total=compute_total(book.get("price"), quantity),
        )
        return await self.create(order)


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------

def get_book_repository(
    database: AsyncDatabase = Depends(get_database),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(database)


def get_customer_repository(
    database: AsyncDatabase = Depends(get_database),
) -> CustomerRepository:
    """FastAPI dependency for CustomerRepository."""
    return CustomerRepository(database)


def get_order_repository(
    database: AsyncDatabase = Depends(get_database),
) -> OrderRepository:
    """FastAPI dependency for OrderRepository."""
    return OrderRepository(database)
