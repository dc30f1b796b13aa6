"""Text for the detail pane tabs."""

import json

from pydantic import BaseModel
from rich.markup import escape

from frontend.state.navigation import NavigatorCategory, ResultItem
from frontend.utils import format_value


def _payload(item: ResultItem):
    if isinstance(item.data, BaseModel):
        return item.data.model_dump()
    return item.data


def render_summary(item: ResultItem | None) -> str:
    if item is None:
        return "Nothing selected"
    lines = [f"[bold]{escape(item.title)}[/bold]"]
    if item.subtitle:
        lines.append(f"[dim]{escape(item.subtitle)}[/dim]")
    lines.append("")
    lines.append(f"ID: {item.id}")
    lines.append(f"Type: {item.type}")

    payload = _payload(item)
    values = payload.get("values") if isinstance(payload, dict) else None
    if values:
        lines.append("")
        for attribute, value in values.items():
            if value:
                lines.append(escape(f"{attribute}: {format_value(value)}"))
    return "\n".join(lines)


def render_json(item: ResultItem | None) -> str:
    if item is None:
        return "{}"
    return json.dumps(_payload(item), indent=2, default=str)


# Endpoint that returns a single item of each kind.
_ITEM_PATHS = {
    "object": "/v2/objects/{slug}/records/{id}",
    "list": "/v2/lists/{id}",
    "list-entry": "/v2/lists/{list_id}/entries/{id}",
    "objects": "/v2/objects/{id}",
    "notes": "/v2/notes/{id}",
    "tasks": "/v2/tasks/{id}",
    "meetings": "/v2/meetings/{id}",
    "webhooks": "/v2/webhooks/{id}",
}


def render_sdk(item: ResultItem | None, category: NavigatorCategory | None) -> str:
    """Python snippet fetching the selected item with AttioClient."""
    if item is None or category is None:
        return "# Select an item to view client code"
    template = _ITEM_PATHS.get(item.type)
    if template is None:
        return f"# No single-item endpoint for {item.type}"

    payload = _payload(item)
    slug = category.object_slug or ""
    if item.type == "object" and not slug and isinstance(payload, dict):
        slug = payload.get("object_id", "")
    list_id = category.list_id or ""
    if isinstance(payload, dict) and payload.get("list_id"):
        list_id = payload["list_id"]
    path = template.format(id=item.id, slug=slug, list_id=list_id)
    return "\n".join(
        [
            f"# Fetch this {item.type.rstrip('s')}",
            "async with AttioClient(api_key) as client:",
            f'    body = await client.get("{path}")',
        ]
    )


def render_actions(item: ResultItem | None) -> str:
    if item is None:
        return "No actions available"
    lines = ["ctrl+r  Refresh", "c       Columns"]
    if item.type == "webhooks":
        lines += ["e       Edit webhook", "x       Delete webhook"]
    if item.type in ("list", "list-status", "objects"):
        lines.append("enter   Drill in")
    return "\n".join(lines)
