# stickdna/plugins.py
import importlib
import logging

from stickdna.config import settings

logger = logging.getLogger(__name__)

ENABLED = settings.get("modules", [])

def load_plugins(app_context, enabled=None):
	for name in (ENABLED if enabled is None else enabled):
		module = importlib.import_module(f"stickdna.{name}")
		module.register(app_context)
		logger.debug("Loaded plugin %s", name)
