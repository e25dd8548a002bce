"""
HTML fragments for the task page.
"""
import html
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from .state import DESCRIPTION_MAX_LENGTH

TOAST_ICONS = {
    "success": "check-circle",
    "error": "exclamation-circle",
    "info": "info-circle",
    "warning": "exclamation-triangle",
}


@dataclass
class Toast:
    """A transient notification"""
    id: str
    message: str
    kind: str = "info"
    visible: bool = True


def escape_html(unsafe: Optional[str]) -> str:
    """Escape &, <, >, double and single quotes"""
    return html.escape(unsafe or "", quote=True)


def parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def format_date(created_at: Any, now: datetime = None) -> str:
    """Relative date label: Today, Yesterday, N days ago, else the date"""
    date = parse_timestamp(created_at)
    if date is None:
        return ""
    now = now or datetime.now(timezone.utc)
    diff_days = int(abs((now - date).total_seconds()) // 86400)

    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    return date.strftime("%Y-%m-%d")


def char_count_label(text: Optional[str]) -> str:
    return f"{len(text or '')}/{DESCRIPTION_MAX_LENGTH}"


def char_count_severity(text: Optional[str]) -> str:
    length = len(text or "")
    if length > 450:
        return "error"
    if length > 400:
        return "warning"
    return "normal"


def render_task_item(task: Dict[str, Any], now: datetime = None) -> str:
    """Render one task. Title and description are escaped."""
    completed = bool(task.get("completed"))
    task_id = escape_html(str(task.get("id", "")))
    status_text = "Completed" if completed else "Pending"
    status_class = "completed" if completed else "pending"
    task_class = "task-item completed" if completed else "task-item"
    checked = " checked" if completed else ""

    description = ""
    if task.get("description"):
        description = f'<p class="task-description">{escape_html(task["description"])}</p>'

    return (
        f'<div class="{task_class}" data-task-id="{task_id}">'
        f'<div class="task-content">'
        f'<input type="checkbox" class="task-checkbox" data-task-id="{task_id}"{checked} />'
        f'<div class="task-details">'
        f'<h3 class="task-title">{escape_html(task.get("title"))}</h3>'
        f'{description}'
        f'<div class="task-meta">'
        f'<span class="task-date">{escape_html(format_date(task.get("createdAt"), now))}</span>'
        f'<span class="task-status {status_class}">{status_text}</span>'
        f'</div></div></div>'
        f'<div class="task-actions">'
        f'<button class="btn btn-icon btn-edit" title="Edit task" data-task-id="{task_id}">Edit</button>'
        f'<button class="btn btn-icon btn-delete" title="Delete task" data-task-id="{task_id}">Delete</button>'
        f'</div></div>'
    )


def render_task_list(tasks: Iterable[Dict[str, Any]], now: datetime = None) -> str:
    return "".join(render_task_item(task, now) for task in tasks)


def render_toast(toast: Toast) -> str:
    icon = TOAST_ICONS.get(toast.kind, TOAST_ICONS["info"])
    classes = f"toast {escape_html(toast.kind)}" + (" show" if toast.visible else "")
    return (
        f'<div id="{escape_html(toast.id)}" class="{classes}">'
        f'<i class="fas fa-{icon}"></i>'
        f'<span>{escape_html(toast.message)}</span>'
        f'</div>'
    )
