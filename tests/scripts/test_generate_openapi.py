import yaml

from scripts.generate_openapi import write_spec
from videocaptions.main import app


def test_write_spec_lists_all_routes(tmp_path):
    output = write_spec(app, tmp_path / "docs" / "openapi.yaml")

    spec = yaml.safe_load(output.read_text())
    paths = spec["paths"]
    assert "/videos/{event}/{slug}/{lang}" in paths
    assert "/captions/{event}/{slug}/{lang}" in paths
    assert set(paths["/flags/{event}/{slug}/{lang}"]) == {"post"}
    assert set(paths["/flags/{event}/{slug}/{lang}/{flagId}"]) == {"delete"}
