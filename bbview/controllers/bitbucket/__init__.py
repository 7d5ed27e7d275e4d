"""Init file for bitbucket module."""

from bbview.controllers.bitbucket.controller import BitbucketController
from bbview.controllers.bitbucket.parsers import PayloadParser

__all__ = ["BitbucketController", "PayloadParser"]
