"""
civiltime - local (civil) date and time values.

- civiltime.core: value types, bridge, calendar, codec, ranges
- civiltime.cli: command-line interface
"""

__version__ = "0.1.0"

# Public API lives in civiltime.core
from civiltime.core import *  # noqa
from civiltime.core import __all__  # noqa
