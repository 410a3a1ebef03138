"""Reusable patterns for building service verticals.

Each module demonstrates a self-contained pattern that can be adapted
to any domain: repository layers over a document store and domain
configuration.
"""
