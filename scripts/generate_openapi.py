"""Write the service's OpenAPI document to ``docs/openapi.yaml``.

Usage::

    python -m scripts.generate_openapi [output-path]
"""

import pathlib
import sys

import yaml
from fastapi import FastAPI

DEFAULT_OUTPUT = pathlib.Path("docs/openapi.yaml")


def write_spec(app: FastAPI, output_path: pathlib.Path = DEFAULT_OUTPUT) -> pathlib.Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(yaml.safe_dump(app.openapi(), sort_keys=False))
    return output_path


def main() -> None:  # Entry-point for the project script
    # Imported here so a broken app surfaces as a readable error.
    try:
        from videocaptions.main import app
    except Exception as exc:  # pragma: no cover – surface helpful error
        sys.stderr.write(f"Unable to import FastAPI app: {exc}\n")
        sys.exit(1)

    output_path = pathlib.Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_OUTPUT
    write_spec(app, output_path)
    print(f"✔ OpenAPI spec written to {output_path}")


if __name__ == "__main__":
    main()
