# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the reflectgen documentation."""

project = "reflectgen"
author = "reflectgen Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_typehints = "description"
napoleon_google_docstring = True

html_theme = "alabaster"
