"""Providers binding stache to concrete data models."""

from stache.providers.data import DataProvider, load_data

__all__ = ["DataProvider", "load_data"]
