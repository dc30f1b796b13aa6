"""Derive the cache key and request label for what the browser is showing.

The key doubles as the controller's reset signal: two views share cached
data exactly when they resolve to the same key.
"""

from __future__ import annotations

from frontend.state.navigation import (
    ListDrillEntries,
    ListDrillState,
    ListDrillStatuses,
    NavigationState,
    ObjectDrillRecords,
    ObjectDrillState,
)


def resolve_category_key(
    category_type: str,
    slug: str | None = None,
    list_drill: ListDrillState | None = None,
    object_drill: ObjectDrillState | None = None,
    list_id: str | None = None,
) -> str:
    """Map a category plus its drill-down depth onto a stable string key.

    Examples:
        >>> resolve_category_key("object", "people")
        'object:people'
        >>> resolve_category_key("lists", list_drill=ListDrillEntries("l1", "Deals"))
        'lists:l1:entries:all'
        >>> resolve_category_key("notes")
        'notes'
    """
    if category_type == "object":
        return f"object:{slug or 'unknown'}"
    if category_type == "list" and list_id:
        return f"list:{list_id}"
    if category_type == "lists":
        if isinstance(list_drill, ListDrillStatuses):
            return f"lists:{list_drill.list_id}:statuses"
        if isinstance(list_drill, ListDrillEntries):
            return f"lists:{list_drill.list_id}:entries:{list_drill.status_id or 'all'}"
    if category_type == "objects" and isinstance(object_drill, ObjectDrillRecords):
        return f"objects:{object_drill.object_slug}:records"
    return category_type


def request_label(
    category_type: str,
    slug: str | None = None,
    list_drill: ListDrillState | None = None,
    object_drill: ObjectDrillState | None = None,
    list_id: str | None = None,
) -> str:
    """Human-readable description of the request a category issues."""
    if category_type == "object":
        return f"query records ({slug or 'object'})"
    if category_type == "list":
        return f"query entries ({list_id})" if list_id else "fetch lists"
    if category_type == "lists":
        if isinstance(list_drill, ListDrillStatuses):
            return f"fetch statuses ({list_drill.list_name})"
        if isinstance(list_drill, ListDrillEntries):
            return f"query entries ({list_drill.list_name})"
        return "fetch lists"
    if category_type == "objects" and isinstance(object_drill, ObjectDrillRecords):
        return f"query records ({object_drill.object_slug})"
    return f"fetch {category_type}"


def category_key_for(navigation: NavigationState) -> str | None:
    """Key for the navigator's current selection, or None when nothing is selected."""
    category = navigation.selected_category
    if category is None:
        return None
    return resolve_category_key(
        category.type,
        slug=category.object_slug,
        list_drill=navigation.list_drill,
        object_drill=navigation.object_drill,
        list_id=category.list_id,
    )
