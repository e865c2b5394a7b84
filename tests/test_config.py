from pathlib import Path

import pytest

from bomgraph import __version__
from bomgraph.core import config
from bomgraph.core.errors import ConfigError


def test_missing_config_uses_defaults(tmp_path: Path):
    loaded = config.load_config(tmp_path / "absent.yml")
    assert loaded == config.BuildConfig()
    assert loaded.ignored_prefixes == ("ignored", "external")
    assert loaded.vendor_dirs == ("node_modules",)
    assert loaded.tool.version == __version__
    assert config.load_config(None) == config.BuildConfig()


def test_load_config_reads_yaml(tmp_path: Path):
    cfg_path = tmp_path / "bomgraph.yml"
    cfg_path.write_text(
        """
ecosystem: npm
ignored_prefixes: [ignored, external, webpack/runtime]
vendor_dirs: node_modules
include_requesters: true
workers: 8
tool:
  vendor: Example
  version: 2.1.0
""".strip()
    )
    loaded = config.load_config(cfg_path)
    assert loaded.ignored_prefixes == ("ignored", "external", "webpack/runtime")
    assert loaded.vendor_dirs == ("node_modules",)
    assert loaded.include_requesters is True
    assert loaded.detect_roots is True
    assert loaded.workers == 8
    assert loaded.tool == config.ToolConfig(vendor="Example", name="webpack-plugin", version="2.1.0")


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "workers: many\n",
        "workers: 0\n",
        "tool: CycloneDX\n",
        "key: [unterminated\n",
        "include_requesters: \"false\"\n",
        "detect_roots: 0\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str):
    cfg_path = tmp_path / "bomgraph.yml"
    cfg_path.write_text(content)
    with pytest.raises(ConfigError):
        config.load_config(cfg_path)


def test_overrides_skip_none_values():
    base = config.BuildConfig(workers=4)
    updated = base.with_overrides(include_requesters=True, workers=None)
    assert updated.include_requesters is True
    assert updated.workers == 4
