"""
Top-level package for the map exporter.

This package exposes the export pipeline (geometry, data URIs, dispatch) and
its adapters. Most code should import from submodules such as:
    map_exporter.core
    map_exporter.export
    map_exporter.services
    map_exporter.ui
"""

__all__: list[str] = []
