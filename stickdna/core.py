import logging
from stickdna.config import settings
from stickdna.plugins import load_plugins

def setup_logging():
	level = (settings.get("logging") or {}).get("level", "INFO")
	logging.basicConfig(
		level=getattr(logging, str(level).upper(), logging.INFO),
		format="%(asctime)s [%(name)s] %(levelname)s: %(message)s"
	)

class AppContext:
	def __init__(self):
		self.modules = []

	def register_module(self, module):
		self.modules.append(module)

	def run(self):
		# modules run their own (blocking) loop on the main thread
		try:
			for mod in self.modules:
				if hasattr(mod, "start"):
					mod.start()
		except KeyboardInterrupt:
			pass
		finally:
			for mod in self.modules:
				if hasattr(mod, "stop"):
					mod.stop()

def main():
	"""Console entry point for the `stickdna` command."""
	setup_logging()
	ctx = AppContext()
	load_plugins(ctx)
	ctx.run()

if __name__ == "__main__":
	main()
