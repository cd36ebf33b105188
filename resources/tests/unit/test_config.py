"""
Unit tests for settings and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from localgraph.graph.models import GraphBuildOptions
from localgraph.utils import config
from localgraph.utils.config import LocalGraphSettings, get_settings, reload_settings
from localgraph.utils.logging import configure_root_logging, setup_logging


def test_defaults():
    settings = LocalGraphSettings()

    assert settings.default_outgoing_depth == 2
    assert settings.default_incoming_depth == 1
    assert settings.include_neighbor_links is True
    assert settings.get_physics_config() == {
        "node_size": 10,
        "link_distance": 100,
        "charge_strength": -250,
    }
    assert settings.validate_settings().valid


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LOCALGRAPH_DEFAULT_OUTGOING_DEPTH", "4")
    monkeypatch.setenv("LOCALGRAPH_INCLUDE_NEIGHBOR_LINKS", "false")

    settings = LocalGraphSettings()
    options = GraphBuildOptions.from_settings(settings)

    assert options == GraphBuildOptions(max_out_depth=4, max_in_depth=1, include_neighbor_links=False)


@pytest.mark.parametrize("field,value", [
    ("default_outgoing_depth", -1),
    ("default_incoming_depth", 6),
    ("node_size", 1),
    ("charge_strength", 0),
])
def test_out_of_range_values_rejected(field, value):
    with pytest.raises(PydanticValidationError):
        LocalGraphSettings(**{field: value})


def test_validate_settings_reports_bad_colors_and_missing_vault(tmp_path):
    settings = LocalGraphSettings(
        vault_path=str(tmp_path / "missing"),
        root_color="orange",
        incoming_colors=[],
    )

    result = settings.validate_settings()

    assert not result.valid
    assert any("Vault path does not exist" in error for error in result.errors)
    assert any("root_color" in error for error in result.errors)
    assert any("incoming" in warning for warning in result.warnings)


def test_validate_settings_can_skip_vault_check(tmp_path):
    settings = LocalGraphSettings(vault_path=str(tmp_path / "missing"))

    result = settings.validate_settings(check_vault=False)

    assert result.valid
    assert result.errors == []


def test_reload_settings(monkeypatch):
    original = get_settings()
    monkeypatch.setenv("LOCALGRAPH_DEFAULT_INCOMING_DEPTH", "3")
    try:
        reloaded = reload_settings()
        assert reloaded.default_incoming_depth == 3
        assert get_settings() is reloaded
    finally:
        config.settings = original


def test_setup_logging_structured(tmp_path):
    log_file = tmp_path / "logs" / "graph.log"
    logger = setup_logging("localgraph.tests.structured", level="DEBUG", structured=True, log_file=log_file)

    logger.debug("built graph")
    for handler in logger.handlers:
        handler.flush()

    assert '"message": "built graph"' in log_file.read_text()
    assert setup_logging("localgraph.tests.structured") is logger
    assert len(logger.handlers) == 1


def test_configure_root_logging_sets_package_level():
    configure_root_logging(level="debug")
    assert logging.getLogger("localgraph").level == logging.DEBUG
    configure_root_logging(level="WARNING")
    assert logging.getLogger("localgraph").level == logging.WARNING
