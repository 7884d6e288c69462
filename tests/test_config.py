from stickdna import core
from stickdna.config import DEFAULTS, load_settings, settings
from stickdna.plugins import load_plugins


def test_missing_file_falls_back_to_defaults(tmp_path):
	loaded = load_settings(tmp_path / "missing.yaml")
	assert loaded == DEFAULTS
	assert loaded is not DEFAULTS


def test_yaml_is_merged_over_defaults(tmp_path):
	path = tmp_path / "config.yaml"
	path.write_text("viewer:\n  width: 800\nevolution:\n  seed: 3\n")
	loaded = load_settings(path)
	assert loaded["viewer"]["width"] == 800
	assert loaded["viewer"]["height"] == DEFAULTS["viewer"]["height"]
	assert loaded["evolution"]["seed"] == 3
	assert loaded["modules"] == ["viewer"]


def test_settings_loaded_at_import():
	assert "viewer" in settings
	assert "evolution" in settings


class FakeModule:
	def __init__(self):
		self.calls = []

	def start(self):
		self.calls.append("start")

	def stop(self):
		self.calls.append("stop")


def test_app_context_starts_then_stops_modules():
	ctx = core.AppContext()
	mod = FakeModule()
	ctx.register_module(mod)
	ctx.register_module(object())
	ctx.run()
	assert mod.calls == ["start", "stop"]


def test_load_plugins_with_nothing_enabled():
	ctx = core.AppContext()
	load_plugins(ctx, enabled=[])
	assert ctx.modules == []
