"""
apisnap

Capture HTTP API responses, normalize volatile fields, and diff two
captures (before/after a change) to detect regressions. Also writes
Jest-compatible snapshot files.
"""

__version__ = '1.0.0'
