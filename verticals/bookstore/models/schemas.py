"""Pydantic schemas for API request validation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from core.models.base import Int64


class _RequestModel(BaseModel):
    # Lax coercion ("2020" -> 2020, 42 -> "42"); unknown fields are dropped
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class BookCreate(_RequestModel):
    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    publishedYear: Optional[Int64] = None


class CustomerCreate(_RequestModel):
    name: Optional[str] = None
    email: Optional[str] = None
    membership: Optional[str] = None


class OrderCreate(_RequestModel):
    bookId: Optional[str] = None
    customerId: Optional[str] = None
    quantity: Optional[Int64] = None
