"""Bookstore vertical configuration.

Re-exports the BookstoreConfig from the patterns module,
demonstrating how verticals use the domain config pattern.
"""

from patterns.domain_config import BookstoreConfig, SeedMode

# Configuration instance resolved from the environment at import time
config = BookstoreConfig.from_env()

__all__ = ["BookstoreConfig", "SeedMode", "config"]
