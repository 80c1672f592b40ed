"""Tests for ppsim.config and ppsim.log."""

import json
import logging
import logging.handlers

import pytest

from ppsim.config import DEFAULT_CONFIG, load_config
from ppsim.log import set_logger_from_config


def test_defaults_without_config_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_config_file_in_working_directory(monkeypatch, tmp_path):
    (tmp_path / 'config.json').write_text(json.dumps({
        'simulation': {'accuracy': [98]},
    }))
    monkeypatch.chdir(tmp_path)

    config = load_config()
    assert config['simulation']['accuracy'] == [98]
    assert config['simulation']['total_scores'] == [800000, 900000, 1000000]


def test_explicit_config_path(tmp_path):
    path = tmp_path / 'ppsim.json'
    path.write_text(json.dumps({
        'download': {'timeout': 5, 'save_path': 'maps'},
        'extra': 1,
    }))

    config = load_config(str(path))
    assert config['download']['timeout'] == 5
    assert config['download']['save_path'] == 'maps'
    assert config['download']['beatmap_url'] == DEFAULT_CONFIG['download']['beatmap_url']
    assert config['extra'] == 1
    assert DEFAULT_CONFIG['download']['timeout'] == 30


def test_missing_explicit_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / 'missing.json'))


@pytest.fixture
def clean_logger():
    logger = logging.getLogger('ppsim')
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)


def test_logger_from_config(clean_logger, tmp_path):
    log_file = tmp_path / 'ppsim.log'
    logger = set_logger_from_config({'logging': {'level': 'debug', 'file': str(log_file)}})

    assert logger is clean_logger
    assert logger.level == logging.DEBUG
    assert any(isinstance(handler, logging.handlers.RotatingFileHandler)
        for handler in logger.handlers)


def test_unknown_log_level_falls_back_to_info(clean_logger):
    logger = set_logger_from_config({'logging': {'level': 'loud'}})
    assert logger.level == logging.INFO
