import os
import copy
import json


CONFIG_FILE = 'config.json'

DEFAULT_CONFIG = {
    "download": {
        "beatmap_url": "https://osu.ppy.sh/osu/{}",
        "timeout": 30,
        "save_path": None
    },
    "simulation": {
        "accuracy": [95, 99, 100],
        "total_scores": [800000, 900000, 1000000]
    },
    "logging": {
        "level": "INFO",
        "file": None
    }
}


def load_config(path=None):
    """Loads a JSON config file merged over the defaults.

    Without an explicit path, ``config.json`` in the working directory is
    used when it exists.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if path is None:
        if not os.path.exists(CONFIG_FILE):
            return config
        path = CONFIG_FILE

    with open(path, encoding='utf-8') as f:
        user_config = json.loads(f.read())

    return _merge(config, user_config)


def _merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(base[key], value)
        else:
            base[key] = value
    return base
