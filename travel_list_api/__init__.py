"""
Top‑level package for the Travel List API.

This file makes ``travel_list_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``travel_list_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
