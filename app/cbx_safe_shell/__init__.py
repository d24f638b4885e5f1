"""
cbx-safe-shell: shell command construction without injection.

Builds command lines from a validated program name and single-quoted
arguments, and runs them through swappable execution backends.
"""

__version__ = "0.1.0"
