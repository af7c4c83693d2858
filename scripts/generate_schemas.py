"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
from pathlib import Path

from kvtestgen.kernel.oracle import OracleDocument


def generate_schemas():
    """Generate the JSON schema verifiers can use to check oracle files."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    oracle_schema = OracleDocument.model_json_schema()
    oracle_schema_path = schemas_dir / "oracle.schema.json"
    with open(oracle_schema_path, 'w', encoding='utf-8') as f:
        json.dump(oracle_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {oracle_schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
