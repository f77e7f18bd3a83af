"""Apply seed plans against a database."""

import logging
from dataclasses import dataclass, field

from sqlalchemy import Engine

from findforge.models.table import TableModel
from findforge.registry import Registry
from findforge.seeds.loader import SeedPlan

logger = logging.getLogger(__name__)


@dataclass
class ModelReport:
    created: int = 0
    found: int = 0


@dataclass
class SeedReport:
    """Outcome of a seed run, per model key."""

    models: dict[str, ModelReport] = field(default_factory=dict)

    @property
    def created(self) -> int:
        return sum(report.created for report in self.models.values())

    @property
    def found(self) -> int:
        return sum(report.found for report in self.models.values())

    def summary_lines(self) -> list[str]:
        return [
            f"{key}: {report.created} created, {report.found} found"
            for key, report in self.models.items()
        ]


def register_plan_models(plan: SeedPlan, engine: Engine, registry: Registry) -> SeedReport:
    """Register a TableModel per plan model and count outcomes via hooks."""
    report = SeedReport()
    for key, model in plan.models.items():
        counts = report.models[key] = ModelReport()
        adapter = TableModel(engine, model.table, primary_key=model.primary_key)
        resolver = registry.register(adapter, key, find_by=model.find_by)

        def count_created(record, counts=counts):
            counts.created += 1

        def count_found(record, counts=counts):
            counts.found += 1

        resolver.on("create", count_created).on("found", count_found)
    return report


def apply_seed_plan(
    plan: SeedPlan,
    engine: Engine,
    registry: Registry | None = None,
) -> SeedReport:
    """Ensure every record of the plan exists.

    Records are processed in file order. Each model is registered on
    registry (a fresh one by default), replacing earlier registrations
    under the same keys.

    Errors from the database propagate; records seeded before the failure
    stay in place.
    """
    registry = registry if registry is not None else Registry()
    report = register_plan_models(plan, engine, registry)

    for record in plan.records:
        registry.find_or_create(record.model, record.attributes)

    logger.info(
        "Seeded %d record(s): %d created, %d found",
        len(plan.records),
        report.created,
        report.found,
    )
    return report
