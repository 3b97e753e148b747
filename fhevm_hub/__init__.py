"""FHEVM example hub toolkit.

Scaffolds standalone example projects from the hub's base template and
generates their documentation.
"""

__version__ = "0.1.0"
