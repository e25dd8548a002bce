"""
Display port for the task controller and its HTML implementation.

The controller only talks to a Display; HtmlPage keeps the page state and
renders it as a complete document.
"""
from collections import OrderedDict
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol

from .rendering import (
    Toast, escape_html, render_task_list, render_toast,
    char_count_label, char_count_severity,
)


class Display(Protocol):
    """Everything the task controller can change on screen"""

    def show_tasks(self, tasks: List[Dict[str, Any]]) -> None: ...

    def set_loading(self, loading: bool) -> None: ...

    def show_error(self, message: str) -> None: ...

    def hide_error(self) -> None: ...

    def add_toast(self, toast: Toast) -> None: ...

    def hide_toast(self, toast_id: str) -> None: ...

    def remove_toast(self, toast_id: str) -> None: ...

    def set_statistics(self, total: int, completed: int, incomplete: int) -> None: ...

    def set_active_filter(self, task_filter: str) -> None: ...

    def fill_form(self, title: str, description: str) -> None: ...

    def reset_form(self) -> None: ...

    def set_edit_mode(self, editing: bool) -> None: ...

    def show_validation_error(self, field: str, message: str) -> None: ...

    def clear_validation_error(self, field: str) -> None: ...


class HtmlPage:
    """In-memory page model rendered to HTML"""

    def __init__(self, clock: Callable[[], datetime] = None):
        self.clock = clock
        self.tasks_html = ""
        self.empty_state_visible = True
        self.loading = False
        self.error_message: Optional[str] = None
        self.toasts: "OrderedDict[str, Toast]" = OrderedDict()
        self.statistics = {"total": 0, "completed": 0, "incomplete": 0}
        self.active_filter = "all"
        self.form_title = ""
        self.form_description = ""
        self.editing = False
        self.validation_errors: Dict[str, str] = {}

    def show_tasks(self, tasks: List[Dict[str, Any]]) -> None:
        now = self.clock() if self.clock else None
        self.tasks_html = render_task_list(tasks, now)
        self.empty_state_visible = not tasks

    def set_loading(self, loading: bool) -> None:
        self.loading = loading

    def show_error(self, message: str) -> None:
        self.error_message = message

    def hide_error(self) -> None:
        self.error_message = None

    def add_toast(self, toast: Toast) -> None:
        self.toasts[toast.id] = toast

    def hide_toast(self, toast_id: str) -> None:
        if toast_id in self.toasts:
            self.toasts[toast_id].visible = False

    def remove_toast(self, toast_id: str) -> None:
        self.toasts.pop(toast_id, None)

    def set_statistics(self, total: int, completed: int, incomplete: int) -> None:
        self.statistics = {"total": total, "completed": completed, "incomplete": incomplete}

    def set_active_filter(self, task_filter: str) -> None:
        self.active_filter = task_filter

    def fill_form(self, title: str, description: str) -> None:
        self.form_title = title
        self.form_description = description

    def reset_form(self) -> None:
        self.form_title = ""
        self.form_description = ""
        self.validation_errors.clear()

    def set_edit_mode(self, editing: bool) -> None:
        self.editing = editing

    def show_validation_error(self, field: str, message: str) -> None:
        self.validation_errors[field] = message

    def clear_validation_error(self, field: str) -> None:
        self.validation_errors.pop(field, None)

    def _filter_buttons(self) -> str:
        buttons = []
        for name, label in (("all", "All"), ("completed", "Completed"), ("incomplete", "Incomplete")):
            active = " active" if name == self.active_filter else ""
            buttons.append(f'<button class="btn-filter{active}" data-filter="{name}">{label}</button>')
        return "".join(buttons)

    def _field_error(self, field: str) -> str:
        message = self.validation_errors.get(field)
        if not message:
            return f'<div id="{field}Error" class="error-message"></div>'
        return f'<div id="{field}Error" class="error-message show">{escape_html(message)}</div>'

    def render(self) -> str:
        """Render the complete page document"""
        submit_label = "Update Task" if self.editing else "Add Task"
        cancel_style = "inline-flex" if self.editing else "none"
        error_style = "flex" if self.error_message else "none"
        spinner_style = "block" if self.loading else "none"
        empty_style = "block" if self.empty_state_visible else "none"
        stats = self.statistics

        return (
            '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8" />'
            '<title>Task Manager</title></head><body><div class="app">'
            '<header class="header"><div class="header-stats">'
            f'<span id="totalTasks">{stats["total"]}</span>'
            f'<span id="completedTasks">{stats["completed"]}</span>'
            f'<span id="remainingTasks">{stats["incomplete"]}</span>'
            '</div></header><main>'
            f'<div id="errorMessage" style="display: {error_style};">'
            f'<span id="errorText">{escape_html(self.error_message)}</span></div>'
            '<div class="task-form-container"><form id="taskForm">'
            f'<input id="taskTitle" name="title" value="{escape_html(self.form_title)}" />'
            f'{self._field_error("title")}'
            f'<textarea id="taskDescription" name="description">{escape_html(self.form_description)}</textarea>'
            f'{self._field_error("description")}'
            f'<div id="descCharCount" class="{char_count_severity(self.form_description)}">'
            f'{char_count_label(self.form_description)}</div>'
            f'<button type="submit">{submit_label}</button>'
            f'<button id="cancelEdit" type="button" style="display: {cancel_style};">Cancel</button>'
            '</form></div>'
            '<input id="searchInput" />'
            f'<div class="filters">{self._filter_buttons()}</div>'
            f'<div id="loadingSpinner" style="display: {spinner_style};"></div>'
            f'<div id="tasksList">{self.tasks_html}</div>'
            f'<div id="emptyState" style="display: {empty_style};">No tasks found</div>'
            '</main>'
            f'<div id="toastContainer">{"".join(render_toast(t) for t in self.toasts.values())}</div>'
            '</div></body></html>'
        )
