from __future__ import annotations
import os
from pathlib import Path
from momo_csv.cli import main as cli_main


def test_cli_no_files_success(write_config, temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert 'SUMMARY files=0/0 success=0 failed=0 rows=0 shipment=0 return=0' in out


def test_cli_directory_missing(write_config, temp_workdir: Path, capsys):
    # break source_directory in config
    text = write_config.read_text(encoding='utf-8').replace('./data', './missing_dir')
    write_config.write_text(text, encoding='utf-8')
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert 'ERROR processing: Directory not found:' in out
    assert 'SUMMARY' not in out


def test_cli_config_option_overrides_default(temp_workdir: Path, sample_config_yaml: str, capsys):
    custom = temp_workdir / 'custom.yml'
    custom.write_text(sample_config_yaml, encoding='utf-8')
    code = cli_main(['--config', str(custom)])
    assert code == 0
    assert 'SUMMARY files=0/0' in capsys.readouterr().out


def test_cli_config_from_env_var(temp_workdir: Path, sample_config_yaml: str, capsys, monkeypatch):
    custom = temp_workdir / 'from_env.yml'
    custom.write_text(sample_config_yaml, encoding='utf-8')
    monkeypatch.setenv('MOMO_CSV_CONFIG', str(custom))
    code = cli_main([])
    assert code == 0


def test_cli_config_from_dotenv(temp_workdir: Path, sample_config_yaml: str, capsys, monkeypatch):
    monkeypatch.delenv('MOMO_CSV_CONFIG', raising=False)
    custom = temp_workdir / 'dotenv.yml'
    custom.write_text(sample_config_yaml, encoding='utf-8')
    (temp_workdir / '.env').write_text(f'MOMO_CSV_CONFIG={custom}\n', encoding='utf-8')
    try:
        code = cli_main([])
    finally:
        # load_dotenv は os.environ に直接書き込む
        os.environ.pop('MOMO_CSV_CONFIG', None)
    assert code == 0


def test_cli_config_missing(temp_workdir: Path, capsys):
    code = cli_main(['--config', 'nope.yml'])
    out = capsys.readouterr().out
    assert code == 1
    assert 'ERROR config: config file not found' in out


def test_cli_explicit_files(write_config, temp_workdir: Path, make_workbook, shipment_rows, capsys):
    excel = make_workbook(temp_workdir / 'picked.xlsx', shipment_rows)
    make_workbook(temp_workdir / 'data' / 'not_picked.xlsx', shipment_rows)
    code = cli_main([str(excel)])
    out = capsys.readouterr().out
    assert code == 0
    assert 'INFO Processing 1 file(s)' in out
    assert 'SUMMARY files=1/1 success=1 failed=0 rows=2 shipment=1 return=0' in out
