"""Export JSON schemas for segment snapshots, move previews and engine errors."""

import json
from pathlib import Path

from itinerator.models import DependencyError, MovePreview, SegmentAdapter


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    schemas = {
        "Segments": SegmentAdapter.json_schema(),
        "MovePreview": MovePreview.model_json_schema(),
        "DependencyError": DependencyError.model_json_schema(),
    }

    for name, schema in schemas.items():
        path = schemas_dir / f"{name}.schema.json"
        with open(path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Exported {name} schema to {path}")


if __name__ == "__main__":
    main()
