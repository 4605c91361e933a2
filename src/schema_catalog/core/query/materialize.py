from __future__ import annotations

import json
from typing import Any, Dict

import polars as pl

from schema_catalog.core.models import SchemasResult


SUPPORTED_FORMATS = ("json", "csv", "text")


def schemas_frame(result: SchemasResult) -> pl.DataFrame:
    """Return the de-duplicated schema names as a sorted one-column frame."""
    return pl.DataFrame(
        {"schema_name": sorted(result.schemas)},
        schema={"schema_name": pl.Utf8},
    )


def result_payload(result: SchemasResult) -> Dict[str, Any]:
    payload = result.to_dict()
    payload["count"] = len(payload["schemas"])
    return payload


def materialize_result(result: SchemasResult, *, format: str = "json") -> str:
    """Render a read result as text in the requested format.

    - json: object with id, database, sorted schemas and count
    - csv: ``schema_name`` header followed by one schema per line
    - text: one schema per line
    """
    if format == "json":
        return json.dumps(result_payload(result), ensure_ascii=False, indent=2)
    elif format == "csv":
        return schemas_frame(result).write_csv()
    elif format == "text":
        return "\n".join(schemas_frame(result)["schema_name"].to_list())
    else:
        raise ValueError(f"Unsupported format: {format}")
