"""Seed plans: YAML descriptions of records to find or create."""

from findforge.seeds.loader import SeedModel, SeedPlan, SeedRecord, load_seed_plan
from findforge.seeds.runner import ModelReport, SeedReport, apply_seed_plan

__all__ = [
    "ModelReport",
    "SeedModel",
    "SeedPlan",
    "SeedRecord",
    "SeedReport",
    "apply_seed_plan",
    "load_seed_plan",
]
