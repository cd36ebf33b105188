import json

import pytest
from unittest.mock import patch
from click.testing import CliRunner

from localgraph.main import cli
from localgraph.utils.config import LocalGraphSettings


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch('localgraph.main.configure_root_logging') as mock_configure:
        yield mock_configure


@pytest.fixture
def vault(tmp_path):
    notes = {
        "A.md": "[[B]]",
        "B.md": "[[C]]",
        "C.md": "end",
        "D.md": "points at [[A]]",
        "E.md": "[[Nowhere]]",
    }
    vault_path = tmp_path / "vault"
    vault_path.mkdir()
    for name, content in notes.items():
        (vault_path / name).write_text(content, encoding="utf-8")
    return vault_path


def test_graph_text_output(runner, vault):
    result = runner.invoke(cli, ['graph', 'A', '--vault', str(vault), '--out-depth', '2', '--in-depth', '1'])

    assert result.exit_code == 0, result.output
    assert "Local graph for A.md" in result.output
    assert "  [2] C.md" in result.output
    assert "  D.md -> A.md" in result.output
    assert "Edges (3):" in result.output


def test_graph_json_output_file(runner, vault, tmp_path):
    output = tmp_path / "out" / "graph.json"

    result = runner.invoke(cli, [
        'graph', 'A', '--vault', str(vault),
        '--out-depth', '1', '--in-depth', '1',
        '--format', 'json', '--output', str(output),
    ])

    assert result.exit_code == 0, result.output
    assert "Wrote 3 nodes and 2 edges" in result.output

    data = json.loads(output.read_text())
    assert data["root"] == "A.md"
    assert [(n["id"], n["depth"], n["direction"]) for n in data["nodes"]] == [
        ("A.md", 0, "root"),
        ("B.md", 1, "outgoing"),
        ("D.md", 1, "incoming"),
    ]
    assert data["nodes"][0]["color"] == "#ff6600"
    assert data["physics"]["charge_strength"] == -250


def test_graph_uses_settings_defaults(runner, vault, tmp_path):
    output = tmp_path / "graph.json"
    settings = LocalGraphSettings(default_outgoing_depth=0, default_incoming_depth=1)

    with patch('localgraph.main.get_settings', return_value=settings):
        result = runner.invoke(cli, ['graph', 'A', '--vault', str(vault), '--format', 'json', '--output', str(output)])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text())
    assert data["max_out_depth"] == 0
    assert [n["id"] for n in data["nodes"]] == ["A.md", "D.md"]


def test_graph_json_stdout_stays_parseable_with_settings_warning(runner, vault):
    settings = LocalGraphSettings(vault_path="", incoming_colors=[])

    with patch('localgraph.main.get_settings', return_value=settings), \
         patch('localgraph.utils.helpers.get_settings', return_value=settings):
        result = runner.invoke(cli, ['graph', 'A', '--vault', str(vault), '--in-depth', '1', '--format', 'json'])

    assert result.exit_code == 0, result.output
    assert "Warning: No incoming colors configured" in result.stderr

    data = json.loads(result.stdout)
    assert data["root"] == "A.md"
    incoming = [n for n in data["nodes"] if n["direction"] == "incoming"]
    assert incoming and all(n["color"] == settings.root_color for n in incoming)


def test_graph_vault_option_overrides_bad_configured_vault(runner, vault, tmp_path):
    settings = LocalGraphSettings(vault_path=str(tmp_path / "moved"))

    with patch('localgraph.main.get_settings', return_value=settings), \
         patch('localgraph.utils.helpers.get_settings', return_value=settings):
        ok = runner.invoke(cli, ['graph', 'A', '--vault', str(vault)])
        failed = runner.invoke(cli, ['graph', 'A'])

    assert ok.exit_code == 0, ok.output
    assert "Local graph for A.md" in ok.stdout
    assert failed.exit_code == 1
    assert "Vault path does not exist" in failed.stderr


def test_graph_no_neighbor_links_flag(runner, vault, tmp_path):
    (vault / "A.md").write_text("[[B]] [[C]]")
    (vault / "B.md").write_text("[[C]]")
    output = tmp_path / "graph.json"

    result = runner.invoke(cli, [
        'graph', 'A', '--vault', str(vault), '--out-depth', '2', '--in-depth', '0',
        '--no-neighbor-links', '--format', 'json', '--output', str(output),
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text())
    assert [(e["source"], e["target"]) for e in data["edges"]] == [("A.md", "B.md"), ("A.md", "C.md")]


def test_graph_unknown_note(runner, vault):
    result = runner.invoke(cli, ['graph', 'Nope', '--vault', str(vault)])

    assert result.exit_code == 1
    assert "Error: Note not found: Nope" in result.output


def test_graph_depth_out_of_range(runner, vault):
    result = runner.invoke(cli, ['graph', 'A', '--vault', str(vault), '--out-depth', '6'])

    assert result.exit_code == 2
    assert "--out-depth" in result.output


def test_graph_missing_vault(runner, tmp_path):
    result = runner.invoke(cli, ['graph', 'A', '--vault', str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Error: Vault path not found" in result.output


def test_vault_stats(runner, vault):
    result = runner.invoke(cli, ['vault-stats', '--vault', str(vault)])

    assert result.exit_code == 0, result.output
    assert "Notes: 5" in result.output
    assert "Resolved links: 3" in result.output
    assert "Unresolved links: 1" in result.output


def test_vault_stats_without_vault(runner):
    with patch('localgraph.utils.helpers.get_settings', return_value=LocalGraphSettings(vault_path="")):
        result = runner.invoke(cli, ['vault-stats'])

    assert result.exit_code == 1
    assert "Error: No vault path specified." in result.output
