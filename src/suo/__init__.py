"""
suo - Raid Timeline Toolkit

A Python toolkit for parsing, validating and rewriting raid timeline scripts
used by combat overlays.
"""

__version__ = "0.1.0"
__author__ = "suo contributors"

from suo.pipeline import (
    parse,
    generate,
    transform,
    parse_file,
    transform_file,
    parse_async,
    generate_async,
    transform_async,
    parse_file_async,
    transform_file_async,
)
