# stickdna/__init__.py
