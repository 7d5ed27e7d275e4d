"""Profile selector screen configuration."""

from __future__ import annotations

PROFILE_LIST_ID = "profile-list"
HEADER_TEXT = "Select a workspace:"
FOOTER_TEXT = "Press 'q' to quit"
