"""Tests for CLI interface."""

import pytest
import tempfile
import json
from pathlib import Path
from unittest.mock import patch

from lazy_astar.cli.main import main_cli, create_parser
from lazy_astar.cli.utils import format_duration, save_results, summarize_result, parse_log_level
from lazy_astar.cli import commands
from lazy_astar.graphs.goreland import Goreland
from lazy_astar.search.astar import Search


GRAPH_DATA = {
    "trucks": [
        {"label": "Start", "x": 0, "y": 0},
        {"label": "Middle", "x": 0, "y": 1},
        {"label": "End", "x": 1, "y": 1},
        {"label": "Island", "x": 3, "y": 3},
    ],
    "tubes": [
        {"from": "Start", "to": "End", "cost": 10000},
        {"from": "Start", "to": "Middle", "cost": 1},
        {"from": "Middle", "to": "End", "cost": 1},
    ]
}


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def graph_file(temp_dir):
    path = temp_dir / "goreland.json"
    path.write_text(json.dumps(GRAPH_DATA))
    return path


@pytest.fixture
def map_file(temp_dir):
    path = temp_dir / "map.txt"
    path.write_text("F.X...\n..X.X.\n....XT\n")
    return path


class TestCLIParser:
    """Test CLI argument parsing."""

    def test_create_parser(self):
        parser = create_parser()
        assert parser.prog == 'lazy-astar'

    def test_path_command_parsing(self):
        parser = create_parser()

        args = parser.parse_args(['path', 'graph.json', 'A', 'B'])
        assert args.command == 'path'
        assert args.graph_file == 'graph.json'
        assert args.start == 'A'
        assert args.goal == 'B'
        assert args.max_steps is None
        assert args.config == []

        args = parser.parse_args(['-c', 'search.max_steps=5', '-c', 'render.path_marker=o',
                                  'path', 'graph.json', 'A', 'B', '--max-steps', '10'])
        assert args.config == ['search.max_steps=5', 'render.path_marker=o']
        assert args.max_steps == 10

    def test_grid_command_parsing(self):
        parser = create_parser()
        args = parser.parse_args(['-q', 'grid', 'map.txt'])
        assert args.command == 'grid'
        assert args.map_file == 'map.txt'
        assert args.quiet is True

    def test_config_command_parsing(self):
        parser = create_parser()
        args = parser.parse_args(['config', 'show'])
        assert args.command == 'config'
        assert args.config_action == 'show'

    def test_verbosity_parsing(self):
        parser = create_parser()
        args = parser.parse_args(['-vv', 'config', 'show'])
        assert args.verbose == 2

    @pytest.mark.parametrize("budget", ["0", "-3", "many"])
    def test_max_steps_must_be_positive(self, budget):
        """Step budgets the config would reject are refused on the command line too."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["grid", "map.txt", "--max-steps", budget])

    def test_max_steps_accepts_positive(self):
        parser = create_parser()
        args = parser.parse_args(["grid", "map.txt", "--max-steps", "3"])
        assert args.max_steps == 3


class TestCLICommands:
    """Test running CLI commands end to end."""

    def test_no_command(self, capsys):
        assert main_cli([]) == 1

    def test_path_found(self, graph_file, capsys):
        exit_code = main_cli(['path', str(graph_file), 'Start', 'End'])
        out = capsys.readouterr().out

        assert exit_code == 0
        assert 'Start -> Middle: 1 (total 1)' in out
        assert 'Distance: 2' in out
        summary = json.loads(out[:out.index('\n}') + 2])
        assert summary['found'] is True
        assert summary['distance'] == 2.0
        assert summary['path'] == ['End', 'Middle', 'Start']
        assert summary['hops'] == 2

    def test_path_not_found(self, graph_file, capsys):
        assert main_cli(['-q', 'path', str(graph_file), 'Start', 'Island']) == 1

    def test_path_unknown_truck(self, graph_file):
        assert main_cli(['path', str(graph_file), 'Start', 'Nowhere']) == 1

    def test_path_missing_file(self, temp_dir):
        assert main_cli(['path', str(temp_dir / 'missing.json'), 'A', 'B']) == 1

    def test_path_budget_exhausted(self, graph_file):
        assert main_cli(['path', str(graph_file), 'Start', 'End', '--max-steps', '1']) == 2

    def test_budget_from_config(self, graph_file):
        assert main_cli(['-c', 'search.max_steps=1', 'path', str(graph_file), 'Start', 'End']) == 2

    def test_path_output_file(self, graph_file, temp_dir):
        output = temp_dir / 'out' / 'result.json'
        exit_code = main_cli(['-q', '-o', str(output), 'path', str(graph_file), 'Start', 'End'])

        assert exit_code == 0
        saved = json.loads(output.read_text())
        assert saved['distance'] == 2.0
        assert saved['graph_file'] == str(graph_file)
        assert 'nodes_expanded' in saved['statistics']

    def test_grid_found(self, map_file, capsys):
        exit_code = main_cli(['-c', 'render.path_marker=o', 'grid', str(map_file)])
        out = capsys.readouterr().out

        assert exit_code == 0
        end = out.index('\n}') + 2
        rendering = out[end:out.index('Found:')]
        assert 'o' in rendering and 'T' in rendering
        assert '*' not in rendering
        summary = json.loads(out[:end])
        assert summary['found'] is True
        assert summary['path'][0] == '5,2'
        assert summary['path'][-1] == '0,0'

    def test_grid_without_markers(self, temp_dir):
        map_file = temp_dir / 'plain.txt'
        map_file.write_text("...\n...\n")
        assert main_cli(['grid', str(map_file)]) == 1

    def test_invalid_override(self, map_file):
        assert main_cli(['-c', 'search.max_steps=0', 'grid', str(map_file)]) == 1

    def test_config_show(self, capsys):
        assert main_cli(['config', 'show']) == 0
        out = capsys.readouterr().out
        assert 'Current Configuration:' in out
        assert 'path_marker' in out

    def test_config_validate(self, capsys):
        assert main_cli(['config', 'validate']) == 0
        assert 'Configuration is valid' in capsys.readouterr().out

    def test_keyboard_interrupt(self, graph_file):
        with patch.object(commands, 'path_command', side_effect=KeyboardInterrupt):
            assert main_cli(['path', str(graph_file), 'Start', 'End']) == 130


class TestCLIUtils:
    """Test CLI utility functions."""

    def test_format_duration(self):
        assert format_duration(0.0000005) == "0.5µs"
        assert format_duration(0.5) == "500.0ms"
        assert format_duration(5) == "5.00s"
        assert format_duration(125) == "2m 5.0s"

    def test_parse_log_level(self):
        import logging
        assert parse_log_level('debug') == logging.DEBUG
        assert parse_log_level('INFO') == logging.INFO
        assert parse_log_level('nonsense') == logging.WARNING

    def test_save_results(self, temp_dir):
        output = temp_dir / 'nested' / 'results.json'
        save_results({'b': 1, 'a': [1, 2]}, output)
        assert json.loads(output.read_text()) == {'a': [1, 2], 'b': 1}

    def test_summarize_not_found(self):
        world = Goreland()
        a = world.add_truck(0, 0, 'A')
        b = world.add_truck(1, 0, 'B')
        search = Search(a, b)
        result = search.result()

        summary = summarize_result(result, search, [])
        assert summary['found'] is False
        assert summary['distance'] is None
        assert summary['hops'] == 0
        assert summary['statistics']['nodes_expanded'] == 1


if __name__ == "__main__":
    pytest.main([__file__])
