from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import yaml

from schema_catalog.core.models import SchemaFilterConfig


@dataclass(frozen=True)
class FilterDefinition:
    """A named schema filter loaded from YAML."""

    name: str
    config: SchemaFilterConfig
    description: str = ""


class FilterRegistry:
    """Load and look up named filter definitions from YAML.

    Expected layout::

        filters:
          - name: app
            description: Application schemas
            database: appdb
            like_any_patterns: ["app_%"]
    """

    def __init__(self, filters_file: Path) -> None:
        """Initialize the registry with a path to the filters YAML file."""
        self.filters_file = filters_file
        self._filters: Dict[str, FilterDefinition] = self._load_filters(filters_file)

    @staticmethod
    def _load_filters(filters_file: Path) -> Dict[str, FilterDefinition]:
        """Load and parse YAML into FilterDefinition objects keyed by name."""
        if not filters_file.exists():
            raise FileNotFoundError(f"Filters file not found: {filters_file}")
        with filters_file.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Filters file must contain a mapping: {filters_file}")
        entries = data.get("filters", []) or []
        filters: Dict[str, FilterDefinition] = {}
        for position, item in enumerate(entries):
            if not isinstance(item, dict):
                raise ValueError(f"Filter entry #{position} is not a mapping")
            fields = dict(item)
            name = str(fields.pop("name", "") or "")
            if not name:
                raise ValueError(f"Filter entry #{position} has no name")
            if name in filters:
                raise ValueError(f"Duplicate filter name: {name}")
            description = str(fields.pop("description", "") or "")
            try:
                config = SchemaFilterConfig.from_mapping(fields)
            except ValueError as e:
                raise ValueError(f"Invalid filter '{name}': {e}") from e
            filters[name] = FilterDefinition(name=name, config=config, description=description)
        return filters

    def all(self) -> List[FilterDefinition]:
        """Return all filter definitions in file order."""
        return list(self._filters.values())

    def names(self) -> List[str]:
        return list(self._filters)

    def get(self, name: str) -> FilterDefinition:
        """Return the definition called ``name``.

        Raises:
            KeyError: If no filter has that name.
        """
        try:
            return self._filters[name]
        except KeyError:
            raise KeyError(
                f"Unknown filter '{name}'. Available: {', '.join(self._filters) or '(none)'}"
            ) from None
