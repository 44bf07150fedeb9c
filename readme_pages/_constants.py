"""Common literal values used across readme_pages.

These constants keep markers, filenames, and sandbox names centralized so the
renderer, splicer, and tests can import the same values without drifting.
Intended for internal use within the readme_pages package.

Examples
--------
>>> from readme_pages import _constants
>>> len(_constants.SPLICE_DELIMITER)
79
>>> _constants.NBSP == "\\u00a0"
True
"""

NBSP = "\u00a0"
NBSP_PLACEHOLDER = "\ue000"
PILCROW = "¶"
SPLICE_DELIMITER = "=" * 79
DOCTEST_LANGUAGE = "python"
DEFAULT_OUTPUT = "index.html"
DEFAULT_MANIFEST = "pyproject.toml"
DEFAULT_FRAGMENTS = ("custom/introduction.md", "custom/footer.md")
DEFAULT_CONFIG = "readme-pages.yaml"
