"""Sphinx configuration for sparsearray documentation."""

from importlib.metadata import version as get_version

# -- Project information -----------------------------------------------------
project = 'sparsearray'
copyright = '2025, Anansi Development'
author = 'Anansi Development'
release = get_version('sparsearray')
version = '.'.join(release.split('.')[:2])

# -- General configuration ---------------------------------------------------
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
]

exclude_patterns = ['_build']

# Google-style docstrings only
napoleon_google_docstring = True
napoleon_numpy_docstring = False

# -- Options for HTML output -------------------------------------------------
html_theme = 'sphinx_rtd_theme'

# -- Intersphinx configuration -----------------------------------------------
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
}

# -- Autodoc configuration ---------------------------------------------------
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'special-members': '__init__, __iter__, __str__, __repr__',
    'exclude-members': '__weakref__, hooks_class',
}
autodoc_type_aliases = {
    'Key': 'sparsearray._keys.Key',
}
