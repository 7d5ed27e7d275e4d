"""Base data provider interface."""

from bbview.controllers.base.base_controller import DataProvider

__all__ = ["DataProvider"]
