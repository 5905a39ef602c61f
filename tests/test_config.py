"""Tests for loading renderer configuration from YAML."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from docset_html._constants import DEFAULT_TAB_ORDER
from docset_html.config import (
    RendererConfig,
    RendererConfigError,
    build_renderer_config,
    load_renderer_config,
)


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "docset.yaml"
    path.write_text(body.strip() + "\n", encoding="utf-8")
    return path


def test_renderer_section_is_loaded(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
renderer:
  module_name: kotlinx-coroutines
  footer_message: "Built with *care*"
  delay_template_substitution: true
  custom_assets:
    - styles/style.css
    - scripts/main.js
  tab_order: Functions
  max_workers: 4
  output_dir: build/html
""",
    )
    config = load_renderer_config(path)
    assert config.module_name == "kotlinx-coroutines"
    assert config.footer_message == "Built with *care*"
    assert config.delay_template_substitution is True
    assert config.custom_assets == ["styles/style.css", "scripts/main.js"]
    assert config.tab_order == ["Functions"]
    assert config.max_workers == 4
    assert config.output_dir == Path("build/html")


def test_top_level_keys_and_defaults(tmp_path: Path) -> None:
    config = load_renderer_config(_write(tmp_path, "module_name: demo"))
    assert config.module_name == "demo"
    assert config.tab_order == list(DEFAULT_TAB_ORDER)
    assert config.pygments_style == "default"
    assert config.max_workers == 1


def test_empty_document_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "docset.yaml"
    path.write_text("", encoding="utf-8")
    assert load_renderer_config(path) == RendererConfig()


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not found"):
        load_renderer_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("- a\n- b", "Top-level YAML structure must be a mapping"),
        ("renderer: [1, 2]", "'renderer' section must be a mapping"),
    ],
)
def test_non_mapping_documents_raise_type_error(
    tmp_path: Path, body: str, message: str
) -> None:
    with pytest.raises(TypeError, match=message):
        load_renderer_config(_write(tmp_path, body))


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"theme": "dark"}, "Unknown renderer option"),
        ({"max_workers": 0}, "'max_workers' must be a positive integer"),
        ({"max_workers": True}, "'max_workers' must be a positive integer"),
        ({"delay_template_substitution": "yes"}, "must be true or false"),
        ({"footer_message": 3}, "'footer_message' must be a string"),
        ({"custom_assets": {"a": 1}}, "'custom_assets' must be a string or a list"),
    ],
)
def test_invalid_values_raise(payload: dict[str, typ.Any], message: str) -> None:
    with pytest.raises(RendererConfigError, match=message):
        build_renderer_config(payload)


def test_yaml_1_2_keeps_yes_as_string(tmp_path: Path) -> None:
    path = _write(tmp_path, "renderer:\n  delay_template_substitution: yes")
    with pytest.raises(RendererConfigError, match="must be true or false"):
        load_renderer_config(path)
