"""Controllers module for BBView TUI.

This module provides the data providers that fetch Bitbucket data and the
launcher that hands URLs and text off to external programs.
"""

from __future__ import annotations

# Base classes
from bbview.controllers.base import DataProvider

# Bitbucket domain
from bbview.controllers.bitbucket import BitbucketController, PayloadParser

# External processes
from bbview.controllers.launcher import ProcessLauncher

__all__ = [
    "BitbucketController",
    "DataProvider",
    "PayloadParser",
    "ProcessLauncher",
]
