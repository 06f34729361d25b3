from __future__ import annotations
import os
from pathlib import Path
from unittest.mock import patch
from surfcast.cli import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL, main as cli_main
from surfcast.logging.init import reset_logging


def test_cli_no_sources_success(write_config, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert 'SUMMARY sources=0/0 ok=0 failed=0 records=0' in out


def test_cli_all_sources_ok(write_config, write_csv, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert 'INFO Loading forecasts from: data' in out
    assert 'SUMMARY sources=1/1 ok=1 failed=0 records=3 skipped_rows=2' in out


def test_cli_directory_missing(write_config, temp_workdir: Path, capsys):
    reset_logging()
    cfg_path = temp_workdir / 'config' / 'surfcast.yml'
    text = cfg_path.read_text(encoding='utf-8').replace('./data', './missing_dir')
    cfg_path.write_text(text, encoding='utf-8')
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL
    assert 'ERROR directory not found:' in out


def test_cli_config_missing(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_FATAL
    assert 'ERROR config: config file not found' in out


def test_cli_explicit_config_path(temp_workdir: Path, sample_config_yaml: str, capsys):
    reset_logging()
    alt = temp_workdir / 'alt.yml'
    alt.write_text(sample_config_yaml, encoding='utf-8')
    code = cli_main(['--config', str(alt)])
    assert code == EXIT_SUCCESS_ALL
    assert 'SUMMARY sources=0/0' in capsys.readouterr().out


def test_cli_env_file_sets_config_path(temp_workdir: Path, sample_config_yaml: str, capsys):
    reset_logging()
    (temp_workdir / 'other.yml').write_text(sample_config_yaml, encoding='utf-8')
    (temp_workdir / '.env').write_text('SURFCAST_CONFIG=other.yml\n', encoding='utf-8')
    try:
        code = cli_main([])
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop('SURFCAST_CONFIG', None)
    assert code == EXIT_SUCCESS_ALL
    assert 'SUMMARY sources=0/0' in capsys.readouterr().out


def test_cli_partial_failure(write_config, write_csv, temp_workdir: Path, capsys):
    reset_logging()
    (temp_workdir / 'data' / 'broken.csv').write_text('foo,bar\n1,2\n', encoding='utf-8')
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_PARTIAL_FAILURE
    assert 'SUMMARY sources=2/2 ok=1 failed=1' in out
    assert 'WARN ' in out


def test_cli_debug_mode(write_config, write_csv, capsys):
    reset_logging()
    code = cli_main(['--debug'])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert 'debug mode enabled' in out
    assert 'records=3' in out
    reset_logging()


def test_cli_inspect_data(write_config, write_csv, capsys):
    reset_logging()
    with patch('surfcast.cli.__main__.render_summary_line') as mock_render:
        code = cli_main(['--inspect-data'])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert 'SOURCE: ' in out and 'kitaizumi.csv' in out
    assert "'timestamp': 0" in out
    assert 'records=3' in out
    assert 'wave_height_display' in out
    mock_render.assert_not_called()


def test_cli_inspect_data_reports_diagnostics(write_config, temp_workdir: Path, capsys):
    reset_logging()
    (temp_workdir / 'data' / 'broken.csv').write_text('foo,bar\n1,2\n', encoding='utf-8')
    code = cli_main(['--inspect-data'])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert 'diagnostic=MISSING_TIMESTAMP_COLUMN' in out
