"""Test bookstore repositories against the in-memory store."""
import pytest
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import ServerSelectionTimeoutError

from verticals.bookstore.models.documents import Book, Customer
from verticals.bookstore.repository import (
    BookOrCustomerNotFound,
    BookRepository,
    CustomerRepository,
    OrderRepository,
    compute_total,
)


@pytest.mark.asyncio
async def test_create_assigns_id(fake_db):
    repo = BookRepository(fake_db)
    book = await repo.create(Book(title="Dune", author="Herbert"))
    assert ObjectId.is_valid(book["_id"])
    assert book["title"] == "Dune"
    assert len(fake_db["books"].docs) == 1


@pytest.mark.asyncio
async def test_list_all_returns_every_document(fake_db):
    repo = CustomerRepository(fake_db)
    await repo.create(Customer(name="Ann"))
    await repo.create(Customer(name="Bob"))
    customers = await repo.list_all()
    assert [c["name"] for c in customers] == ["Ann", "Bob"]
    assert all(isinstance(c["_id"], str) for c in customers)


@pytest.mark.asyncio
async def test_get_missing_returns_none(fake_db):
    repo = BookRepository(fake_db)
    assert await repo.get(str(ObjectId())) is None
    assert await repo.get(None) is None


@pytest.mark.asyncio
async def test_get_malformed_id_raises(fake_db):
    with pytest.raises(InvalidId):
        await BookRepository(fake_db).get("abc")


@pytest.mark.asyncio
async def test_insert_many_is_unordered(fake_db):
    repo = BookRepository(fake_db)
    inserted = await repo.insert_many([Book(title="A"), Book(title="B")])
    assert len(inserted) == 2
    assert fake_db["books"].insert_many_calls == [{"count": 2, "ordered": False}]
    assert await repo.count() == 2


@pytest.mark.asyncio
async def test_store_errors_propagate(fake_db):
    fake_db["books"].error = ServerSelectionTimeoutError("no servers")
    with pytest.raises(ServerSelectionTimeoutError):
        await BookRepository(fake_db).list_all()


def test_compute_total():
    assert compute_total(None, 3) is None
    assert compute_total(10.0, None) is None
    assert compute_total(2.5, 4) == 10.0


@pytest.mark.asyncio
async def test_place_order_without_price(fake_db):
    book = await BookRepository(fake_db).create(Book(title="Dune"))
    customer = await CustomerRepository(fake_db).create(Customer(name="Ann"))

    order = await OrderRepository(fake_db).place(book["_id"], customer["_id"], 3)

    assert order["book"] == book["_id"]
    assert order["customer"] == customer["_id"]
    assert order["quantity"] == 3
    assert order["total"] is None
    stored = fake_db["orders"].docs[0]
    assert stored["book"] == ObjectId(book["_id"])


@pytest.mark.asyncio
async def test_place_order_uses_stored_price(fake_db):
    # a price written straight into the store is honoured
    book_id = ObjectId()
    fake_db["books"].docs.append({"_id": book_id, "title": "Dune", "price": 12.5})
    customer = await CustomerRepository(fake_db).create(Customer(name="Ann"))

    order = await OrderRepository(fake_db).place(str(book_id), customer["_id"], 2)
    assert order["total"] == 25.0


@pytest.mark.asyncio
async def test_place_order_missing_customer(fake_db):
    book = await BookRepository(fake_db).create(Book(title="Dune"))
    with pytest.raises(BookOrCustomerNotFound, match="Book or customer not found"):
        await OrderRepository(fake_db).place(book["_id"], str(ObjectId()), 1)
    assert fake_db["orders"].docs == []


@pytest.mark.asyncio
async def test_place_order_malformed_id(fake_db):
    with pytest.raises(InvalidId):
        await OrderRepository(fake_db).place("nope", str(ObjectId()), 1)
