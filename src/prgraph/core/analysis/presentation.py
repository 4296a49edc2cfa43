from __future__ import annotations

"""
Node and Edge Presentation Attributes.

Maps structural facts (status, novelty, context) onto the color, icon,
size and CSS class consumed by the rendering layer. The graph pipeline
treats these dictionaries as opaque.
"""

from typing import Any, Dict

from prgraph.domain import constants as c
from prgraph.domain.graph_models import ChangedFile, ChangeStatus


def color_for_status(status: ChangeStatus) -> str:
    return c.STATUS_FILL.get(ChangeStatus(status).value, c.FALLBACK_FILL)


def icon_for_status(status: ChangeStatus) -> str:
    return c.STATUS_ICON.get(ChangeStatus(status).value, c.STATUS_ICON["modified"])


def root_attributes() -> Dict[str, Any]:
    return {
        "type": "root",
        "fill": c.ROOT_FILL,
        "size": c.ROOT_SIZE,
        "className": "directory",
    }


def directory_attributes(is_new: bool, selected: bool = False) -> Dict[str, Any]:
    """Directories missing from the base revision are highlighted as new."""
    return {
        "type": "directory",
        "selected": selected,
        "isNew": is_new,
        "fill": c.DIRECTORY_NEW_FILL if is_new else c.DIRECTORY_FILL,
        "icon": c.DIRECTORY_NEW_ICON if is_new else c.DIRECTORY_ICON,
        "size": c.DIRECTORY_SIZE,
        "className": "new-directory" if is_new else "directory",
    }


def file_attributes(record: ChangedFile, selected: bool = False) -> Dict[str, Any]:
    return {
        "type": "file",
        "status": ChangeStatus(record.status).value,
        "additions": record.additions,
        "deletions": record.deletions,
        "selected": selected,
        "fill": color_for_status(record.status),
        "icon": icon_for_status(record.status),
        "size": c.FILE_SIZE,
        "className": "file",
    }


def context_file_attributes(selected: bool = False) -> Dict[str, Any]:
    return {
        "type": "file",
        "context": True,
        "selected": selected,
        "fill": c.CONTEXT_FILE_FILL,
        "size": c.CONTEXT_FILE_SIZE,
        "className": "file",
    }


def context_edge_attributes() -> Dict[str, Any]:
    return {"fill": c.CONTEXT_EDGE_FILL, "style": c.CONTEXT_EDGE_STYLE}
