"""
Core domain models, errors, configuration and contracts.

Building blocks independent of the host execution environment.
"""
