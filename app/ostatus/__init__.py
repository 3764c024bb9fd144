"""ostatus - track and report the OS status.

Detects the system role of a machine and records how its installation
drifts from the reference installation of that role.
"""

__version__ = "0.1.0"
