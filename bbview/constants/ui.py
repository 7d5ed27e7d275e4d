"""UI-related constants.

Maps the semantic tags produced by the dashboard presenter onto rich styles.
The presenter never sees these; only the screen does.
"""

from typing import Final

from bbview.constants.enums import StatusTag

TAG_STYLES: Final[dict[StatusTag, str]] = {
    StatusTag.PLAIN: "",
    StatusTag.MUTED: "color(241)",
    StatusTag.CURSOR: "color(205)",
    StatusTag.TITLE_ACTIVE: "bold color(42)",
    StatusTag.TITLE_INACTIVE: "color(241)",
    StatusTag.TAB_ACTIVE: "bold color(0) on color(42)",
    StatusTag.TAB_INACTIVE: "color(241)",
    StatusTag.AUTHOR: "color(99)",
    StatusTag.BRANCH: "",
    StatusTag.DETAIL_HEADER: "color(220)",
    StatusTag.HELP: "color(241)",
    StatusTag.FILTER: "bold color(42)",
    StatusTag.MESSAGE: "bold color(211)",
    StatusTag.ERROR: "bold color(196)",
    StatusTag.LOADING: "color(241)",
    StatusTag.PR_OPEN: "color(42)",
    StatusTag.PR_DRAFT: "color(241)",
    StatusTag.PR_MERGED: "color(99)",
    StatusTag.PR_DECLINED: "color(196)",
    StatusTag.PR_SUPERSEDED: "color(241)",
    StatusTag.STATE_COMPLETED: "color(99)",
    StatusTag.STATE_RUNNING: "color(220)",
    StatusTag.STATE_PENDING: "color(214)",
    StatusTag.STATE_PAUSED: "color(214)",
    StatusTag.STATE_ERROR: "color(196)",
    StatusTag.RESULT_SUCCESS: "color(42)",
    StatusTag.RESULT_FAILED: "color(196)",
    StatusTag.RESULT_STOPPED: "color(214)",
    StatusTag.RESULT_EXPIRED: "color(241)",
    StatusTag.RESULT_NONE: "color(241)",
    StatusTag.DIFF_ADDED: "color(42)",
    StatusTag.DIFF_REMOVED: "color(196)",
    StatusTag.DIFF_HUNK: "color(45)",
}

__all__ = [
    "TAG_STYLES",
]
