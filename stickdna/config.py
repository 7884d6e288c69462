# stickdna/config.py

import copy
import os
from pathlib import Path

import yaml

# config.yaml in the parent directory of this package, unless STICKDNA_CONFIG says otherwise
CONFIG_PATH = Path(os.environ.get("STICKDNA_CONFIG", Path(__file__).parent.parent / "config.yaml"))

DEFAULTS = {
	"modules": ["viewer"],
	"logging": {"level": "INFO"},
	"viewer": {
		"width": 600,
		"height": 600,
		"fps": 60,
		"caption": "stickdna",
		"screenshot_dir": ".",
	},
	"evolution": {
		"population_size": 10,
		"mutation_rate": 0.9,
		"generation_speed": 10,
		"seed": None,
	},
	"figure": {
		"sync_dragged_only": False,
	},
}

def _merge(base, override):
	merged = copy.deepcopy(base)
	for key, value in (override or {}).items():
		if isinstance(value, dict) and isinstance(merged.get(key), dict):
			merged[key] = _merge(merged[key], value)
		else:
			merged[key] = value
	return merged

def load_settings(path=CONFIG_PATH):
	path = Path(path)
	if not path.exists():
		return copy.deepcopy(DEFAULTS)
	with open(path, "r") as f:
		return _merge(DEFAULTS, yaml.safe_load(f))

# Load once at import time
settings = load_settings()
