# setup.py  (located at the repository root)
from setuptools import setup, find_packages

setup(
	name="stickdna",
	version="0.1.0",
	packages=find_packages(exclude=["tests", "tests.*"]),  # find stickdna/ automatically
	install_requires=[
		"numpy", "pygame", "PyYAML"
	],
	extras_require={
		"test": ["pytest"],
	},
	entry_points={
		"console_scripts": [
			"stickdna=stickdna.core:main",  # command → module:function
		],
	},
)
