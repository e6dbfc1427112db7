"""Export JSON schemas for the public API payloads."""

import json
from pathlib import Path

from pydantic import BaseModel

from backend.circuit_flow.models import (
    DocumentListResponse,
    DocumentRecord,
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
)

SCHEMAS: dict[str, type[BaseModel]] = {
    "DocumentList": DocumentListResponse,
    "Document": DocumentRecord,
    "GenerateRequest": GenerateRequest,
    "GenerateResponse": GenerateResponse,
    "Error": ErrorResponse,
}


def main(schemas_dir: Path = Path("docs/schemas")) -> list[Path]:
    """Export schemas to docs/schemas/ (by-alias, as sent on the wire)."""
    schemas_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, model in SCHEMAS.items():
        path = schemas_dir / f"{name}.schema.json"
        with open(path, "w") as f:
            json.dump(model.model_json_schema(by_alias=True), f, indent=2)
        print(f"Exported {name} schema to {path}")
        written.append(path)
    return written


if __name__ == "__main__":
    main()
