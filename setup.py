#!/usr/bin/env python3
# -*- coding: utf_8 -*-

from setuptools import setup
from os.path import dirname, join


my_dir = dirname(__file__)
with open(join(my_dir, "requirements.txt")) as file:
	install_requires = [line for line in file.read().split('\n') if line]
with open(join(my_dir, "README.md")) as file:
	long_description = file.read()
#end with

setup(name = "tonfee",
	version = "0.1.0",
	description = "TON message bodies as Bags of Cells and their fee estimation",
	packages=["tonfee"],
	install_requires = install_requires,
	extras_require = {"test": ["pytest>=7"]},
	long_description = long_description,
	long_description_content_type = "text/markdown",
	python_requires = ">=3.8"
)
