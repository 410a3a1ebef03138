"""Document models for the bookstore vertical.

Each model inherits from Document and names its collection. Fields are
optional, matching the schema-less store: a record holds whichever declared
fields the client supplied.
"""

from typing import Optional

from core.models.base import Document, Int64, ObjectIdStr


class Book(Document):
    """A book in the catalog. There is no price field."""

    __collection__ = "books"

    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    publishedYear: Optional[Int64] = None


class Customer(Document):
    """A registered customer."""

    __collection__ = "customers"

    name: Optional[str] = None
    email: Optional[str] = None
    membership: Optional[str] = None


class Order(Document):
    """A purchase of one book by one customer."""

    __collection__ = "orders"

    book: ObjectIdStr
    customer: ObjectIdStr
    quantity: Optional[Int64] = None
    total: Optional[float] = None

    def to_document(self) -> dict:
        # total is kept even when missing so the stored order shows it
        return self.model_dump()
