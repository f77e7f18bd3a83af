"""Load seed plans from YAML files.

A seed plan names the models to register and the records to ensure:

    models:
      user:
        table: users          # defaults to the model name
        find_by: [email]
        primary_key: id       # optional
    records:
      - model: user
        attributes: {email: a@x.com, name: A}
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from findforge.errors import SeedPlanError


@dataclass
class SeedModel:
    """A model entry of a seed plan."""

    key: str
    table: str
    find_by: list[str]
    primary_key: str = "id"

    @classmethod
    def from_dict(cls, key: str, data: dict[str, Any] | None) -> "SeedModel":
        data = data or {}
        if not isinstance(data, dict):
            raise SeedPlanError(f"Model '{key}' must be a mapping")

        find_by = data.get("find_by")
        if isinstance(find_by, str):
            find_by = [find_by]
        if not find_by or not all(isinstance(name, str) for name in find_by):
            raise SeedPlanError(f"Model '{key}' needs find_by with at least one field name")

        return cls(
            key=key,
            table=data.get("table", key),
            find_by=list(find_by),
            primary_key=data.get("primary_key", "id"),
        )


@dataclass
class SeedRecord:
    """One record a seed plan ensures exists."""

    model: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class SeedPlan:
    models: dict[str, SeedModel] = field(default_factory=dict)
    records: list[SeedRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SeedPlan":
        """Create a SeedPlan from parsed YAML.

        Raises:
            SeedPlanError: If the plan is malformed or a record references
                an undeclared model
        """
        if not isinstance(data, dict):
            raise SeedPlanError("Seed plan must be a mapping with 'models' and 'records'")

        raw_models = data.get("models") or {}
        if not isinstance(raw_models, dict):
            raise SeedPlanError("'models' must be a mapping of model name to settings")
        models = {
            str(key): SeedModel.from_dict(str(key), value)
            for key, value in raw_models.items()
        }

        raw_records = data.get("records") or []
        if not isinstance(raw_records, list):
            raise SeedPlanError("'records' must be a list")

        records = []
        for index, entry in enumerate(raw_records):
            if not isinstance(entry, dict) or "model" not in entry:
                raise SeedPlanError(f"Record #{index + 1} needs a 'model'")
            model = str(entry["model"])
            if model not in models:
                raise SeedPlanError(f"Record #{index + 1} references unknown model '{model}'")
            attributes = entry.get("attributes") or {}
            if not isinstance(attributes, dict):
                raise SeedPlanError(f"Record #{index + 1} attributes must be a mapping")
            records.append(SeedRecord(model=model, attributes=attributes))

        return cls(models=models, records=records)


def load_seed_plan(path: Path | str) -> SeedPlan:
    """Read and validate a seed plan file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SeedPlanError(f"Invalid YAML in {path}: {e}") from e
    return SeedPlan.from_dict(data)
