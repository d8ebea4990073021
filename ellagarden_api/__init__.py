"""
Top‑level package for the BRF Ellagården API.

This file makes ``ellagarden_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``ellagarden_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
