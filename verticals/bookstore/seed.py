"""Sample data inserted at startup.

One unordered bulk insert per collection. With ``SeedMode.IF_EMPTY`` a
collection that already holds documents is left alone; ``SeedMode.ALWAYS``
inserts unconditionally, so every restart adds another copy.
"""

import logging
from dataclasses import dataclass, field

from pymongo.asynchronous.database import AsyncDatabase

from patterns.domain_config import SeedMode
from patterns.repository import BaseRepository
from verticals.bookstore.models.documents import Book, Customer
from verticals.bookstore.repository import BookRepository, CustomerRepository

logger = logging.getLogger(__name__)


SAMPLE_BOOKS = [
    Book(title="Book 1", author="Author 1", genre="Fiction", publishedYear=2020),
    Book(title="Book 2", author="Author 2", genre="Non-Fiction", publishedYear=2019),
]

SAMPLE_CUSTOMERS = [
    Customer(name="Customer 1", email="customer1@example.com", membership="Gold"),
    Customer(name="Customer 2", email="customer2@example.com", membership="Silver"),
]


@dataclass
class SeedReport:
    """Number of documents inserted per collection."""

    inserted: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.inserted.values())


async def _seed_collection(
    repo: BaseRepository, samples: list, mode: SeedMode
) -> int:
    if mode is SeedMode.IF_EMPTY and await repo.count() > 0:
        logger.info(
            "Collection %r already populated, skipping seed",
            repo.model.__collection__,
        )
        return 0
    inserted = await repo.insert_many(samples)
    logger.info("%s inserted: %d", repo.model.__collection__, len(inserted))
    return len(inserted)


async def seed_database(
    database: AsyncDatabase, mode: SeedMode = SeedMode.IF_EMPTY
) -> SeedReport:
    """Insert the sample books and customers.

    Driver errors propagate; the caller decides whether they are fatal.
    """
    report = SeedReport()
    if mode is SeedMode.OFF:
        return report

    for repo, samples in (
        (BookRepository(database), SAMPLE_BOOKS),
        (CustomerRepository(database), SAMPLE_CUSTOMERS),
    ):
        report.inserted[repo.model.__collection__] = await _seed_collection(
            repo, samples, mode
        )

    logger.info("Database seeded with %d initial records", report.total)
    return report
