"""
docstyle exceptions

Styling itself never raises for content problems (bad formulas, unmatched
caption markers, unknown entity types all degrade gracefully). These
exceptions cover the I/O edges: loading profiles and starting a layout
backend.
"""


class DocstyleError(Exception):
    """Base exception for docstyle errors"""
    pass


class ProfileLoadError(DocstyleError):
    """Profile or overrides file could not be read or decoded"""
    pass


class MeasurementError(DocstyleError):
    """Layout backend could not be started"""
    pass
