# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the Hermes documentation."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

project = "Hermes"
author = "Hermes Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
napoleon_google_docstring = True

html_theme = "alabaster"
