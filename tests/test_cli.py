import json
from pathlib import Path

import pytest

from bomgraph import __main__ as entrypoint
from bomgraph import cli


def _write_package(directory: Path, name: str, version: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "package.json").write_text(json.dumps({"name": name, "version": version}), encoding="utf-8")


def test_cli_generates_summary(tmp_path: Path):
    app = tmp_path / "app"
    _write_package(app, "app", "1.0.0")
    _write_package(app / "node_modules" / "lodash", "lodash", "4.17.21")
    stats_path = tmp_path / "stats.json"
    stats_path.write_text(
        json.dumps(
            {
                "modules": [
                    {"issuer": str(app / "src" / "index.js"), "identifier": str(app / "node_modules" / "lodash" / "index.js")},
                    {"issuer": str(app / "src" / "index.js"), "identifier": "external \"fs\""},
                    {"identifier": str(app / "src" / "index.js")},
                ]
            }
        )
    )

    out_path = tmp_path / "reports" / "summary.json"
    rc = cli.main([
        "--stats",
        str(stats_path),
        "--config",
        str(tmp_path / "missing.yml"),
        "--out",
        str(out_path),
    ])
    assert rc == 0
    data = json.loads(out_path.read_text())
    assert data["total_components"] == 1
    assert data["total_relations"] == 1
    assert data["roots"] == ["pkg:npm/app@1.0.0"]
    assert (out_path.parent / "summary.md").exists()


def test_cli_include_requesters_flag(tmp_path: Path):
    app = tmp_path / "app"
    _write_package(app, "app", "1.0.0")
    _write_package(app / "node_modules" / "lodash", "lodash", "4.17.21")
    stats_path = tmp_path / "stats.json"
    stats_path.write_text(
        json.dumps(
            {"modules": [{"issuer": {"resource": str(app / "index.js")}, "resource": str(app / "node_modules" / "lodash" / "a.js")}]}
        )
    )
    out_path = tmp_path / "summary.json"
    rc = cli.main(["--stats", str(stats_path), "--out", str(out_path), "--format", "json", "--include-requesters", "--workers", "2"])
    assert rc == 0
    refs = {component["bom-ref"] for component in json.loads(out_path.read_text())["components"]}
    assert refs == {"pkg:npm/app@1.0.0", "pkg:npm/lodash@4.17.21"}
    assert not (tmp_path / "summary.md").exists()


def test_cli_reports_input_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    rc = cli.main(["--stats", str(tmp_path / "missing-stats.json"), "--out", str(tmp_path / "summary.json")])
    assert rc == 2
    assert "error:" in capsys.readouterr().err

    bad_config = tmp_path / "bomgraph.yml"
    bad_config.write_text("tool:\n  version: nightly\n")
    stats_path = tmp_path / "stats.json"
    stats_path.write_text(json.dumps({"modules": []}))
    rc = cli.main(["--stats", str(stats_path), "--config", str(bad_config), "--out", str(tmp_path / "summary.json")])
    assert rc == 2


def test_entrypoint_delegates_to_cli(monkeypatch: pytest.MonkeyPatch):
    captured: dict[str, object] = {}

    def fake_main(argv):  # pragma: no cover - exercised in test
        captured["argv"] = argv
        return 42

    monkeypatch.setattr(entrypoint.cli, "main", fake_main)
    result = entrypoint.main(["--stats", "stats.json"])
    assert result == 42
    assert captured["argv"] == ["--stats", "stats.json"]
