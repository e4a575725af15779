"""Seed loading use cases."""

from .load_seed import (
    LoadSeedUseCase,
    SeedBundle,
    SeedCategory,
    SeedCounts,
    SeedDeal,
    SeedReport,
    SeedStore,
    SeedUser,
)

__all__ = [
    "LoadSeedUseCase",
    "SeedBundle",
    "SeedCategory",
    "SeedCounts",
    "SeedDeal",
    "SeedReport",
    "SeedStore",
    "SeedUser",
]
