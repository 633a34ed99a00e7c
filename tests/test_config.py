import sys
import json
import os
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parents[1]
src_path = str(repo_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import builtins
from unhandled import config as conf


@pytest.fixture
def restore(monkeypatch):
    # setattr to the current value so monkeypatch restores it after _load_json_config mutates it
    for name in ("LOG_DIR", "LOG_FILE", "VERBOSE", "EXIT_ON_EVENT", "WATCHED_SIGNALS"):
        monkeypatch.setattr(conf, name, getattr(conf, name))
    return monkeypatch


def test_get_config_path_defaults_to_cwd(monkeypatch, tmp_path):
    monkeypatch.delenv(conf.CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    assert conf._get_config_path() == os.path.join(str(tmp_path), "unhandled.json")


def test_get_config_path_from_env(monkeypatch, tmp_path):
    target = str(tmp_path / "custom.json")
    monkeypatch.setenv(conf.CONFIG_ENV_VAR, target)
    assert conf._get_config_path() == target


def test_load_json_config_missing_file_keeps_defaults(restore, tmp_path):
    restore.setattr(conf, '_get_config_path', lambda: str(tmp_path / 'missing.json'))
    conf._load_json_config()
    assert conf.VERBOSE is False
    assert conf.WATCHED_SIGNALS == ("SIGINT", "SIGTERM")
    assert not (tmp_path / 'missing.json').exists()


def test_load_json_config_handles_invalid_json(restore, tmp_path):
    target = tmp_path / 'bad.json'
    target.write_text('not json')
    restore.setattr(conf, '_get_config_path', lambda: str(target))
    # should not raise
    conf._load_json_config()
    assert conf.EXIT_ON_EVENT is False


def test_load_json_config_handles_open_exception(restore, tmp_path):
    target = tmp_path / 'cfg.json'
    target.write_text('{}')
    restore.setattr(conf, '_get_config_path', lambda: str(target))
    restore.setattr(builtins, 'open', lambda *a, **k: (_ for _ in ()).throw(OSError('boom')))
    conf._load_json_config()


def test_load_json_config_applies_overrides(restore, tmp_path):
    target = tmp_path / 'good.json'
    payload = {
        'LOG_DIR': 'faultlogs',
        'LOG_FILE': 'faults.log',
        'VERBOSE': True,
        'EXIT_ON_EVENT': True,
        'WATCHED_SIGNALS': ['sigint', 'SIGTERM', 'SIGHUP'],
    }
    target.write_text(json.dumps(payload), encoding='utf-8')
    restore.setattr(conf, '_get_config_path', lambda: str(target))
    conf._load_json_config()
    assert conf.LOG_DIR == 'faultlogs'
    assert conf.LOG_FILE == 'faults.log'
    assert conf.VERBOSE is True
    assert conf.EXIT_ON_EVENT is True
    assert conf.WATCHED_SIGNALS == ('SIGINT', 'SIGTERM', 'SIGHUP')


def test_load_json_config_ignores_wrong_types(restore, tmp_path):
    target = tmp_path / 'types.json'
    payload = {
        'LOG_DIR': 5,
        'VERBOSE': 'yes',
        'EXIT_ON_EVENT': 1,
        'WATCHED_SIGNALS': [],
    }
    target.write_text(json.dumps(payload), encoding='utf-8')
    restore.setattr(conf, '_get_config_path', lambda: str(target))
    conf._load_json_config()
    assert conf.LOG_DIR is None
    assert conf.VERBOSE is False
    assert conf.EXIT_ON_EVENT is False
    assert conf.WATCHED_SIGNALS == ("SIGINT", "SIGTERM")


def test_load_json_config_ignores_non_object(restore, tmp_path):
    target = tmp_path / 'list.json'
    target.write_text('[1, 2]', encoding='utf-8')
    restore.setattr(conf, '_get_config_path', lambda: str(target))
    conf._load_json_config()
    assert conf.VERBOSE is False
