# Sphinx configuration for the RadarDetect API reference.
#
# Build with:  sphinx-build -b html docs/source docs/build

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
sys.path.insert(0, ROOT)

import radardetect  # noqa: E402

# -- Project information -----------------------------------------------------
project = "RadarDetect"
author = radardetect.__author__
copyright = f"2025, {author}"
version = ".".join(radardetect.__version__.split(".")[:2])
release = radardetect.__version__

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
]

exclude_patterns = ["_build"]

# -- Options for HTML output -------------------------------------------------
html_theme = "sphinx_rtd_theme"
html_title = f"RadarDetect {release}"

# -- Extension configuration -------------------------------------------------
# Docstrings are Google style with extra "Usage" and "References" blocks
napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_custom_sections = [("Usage", "example"), ("References", "references")]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "scipy": ("https://docs.scipy.org/doc/scipy/", None),
}

autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
    "exclude-members": "__weakref__",
}
