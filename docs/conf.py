"""Sphinx configuration."""

project = "FBAFileUtil"
author = "KBase"
copyright = "2025, KBase"
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_click",
    "myst_parser",
]
autodoc_typehints = "description"
html_theme = "furo"
