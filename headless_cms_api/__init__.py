"""
Top‑level package for the headless CMS API.

This file makes ``headless_cms_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``headless_cms_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
