"""Bookstore vertical: books, customers and orders over MongoDB.

Demonstrates the patterns working together in one domain:
- Pydantic document models mapped to collections
- Async repositories injected with FastAPI Depends
- FastAPI router with {"message": ...} error responses
- Startup seeder gated by SeedMode
- Dataclass configuration
"""
