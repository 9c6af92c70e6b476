"""Sphinx configuration for the Web3 Academy API reference."""

import os
import sys

# Project root, so autodoc can import academy/ and lessons/
sys.path.insert(0, os.path.abspath(os.path.join("..", "..")))

project = "Web3 Academy"
copyright = "2026, Web3 Academy contributors"
author = "Web3 Academy contributors"
release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.viewcode",
    "sphinx.ext.napoleon",
]

exclude_patterns = []

html_theme = "sphinx_rtd_theme"

napoleon_google_docstrings = True
napoleon_numpy_docstrings = False

autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
}
