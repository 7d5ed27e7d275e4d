"""Init file for parsers module."""

from bbview.controllers.bitbucket.parsers.payload_parser import PayloadParser

__all__ = ["PayloadParser"]
