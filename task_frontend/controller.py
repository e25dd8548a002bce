"""
Client-side task controller.

Mirrors the task lifecycle against the Task API, keeps the client state and
pushes every change to a Display.
"""
import asyncio
import inspect
import itertools
import logging
from typing import Awaitable, Callable, Optional, Set, Union

from .api_client import TaskApiClient, TaskApiError, TaskTransportError
from .core.config import get_settings
from .display import Display
from .rendering import Toast
from .state import FILTERS, ClientState, validate_task_form, visible_tasks

logger = logging.getLogger(__name__)

API_ERRORS = (TaskApiError, TaskTransportError)

ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]

DELETE_CONFIRMATION = "Are you sure you want to delete this task? This action cannot be undone."


class TaskController:
    """Owns one ClientState and drives a Display from API results"""

    def __init__(
        self,
        api: TaskApiClient,
        display: Display,
        confirm: Optional[ConfirmCallback] = None,
        search_debounce_ms: int = None,
        toast_duration_ms: int = None,
        toast_fade_ms: int = None
    ):
        settings = get_settings()
        self.api = api
        self.display = display
        self.confirm = confirm
        self.state = ClientState()

        self.search_debounce = (search_debounce_ms if search_debounce_ms is not None
                                else settings.search_debounce_ms) / 1000
        self.toast_duration = (toast_duration_ms if toast_duration_ms is not None
                               else settings.toast_duration_ms) / 1000
        self.toast_fade = (toast_fade_ms if toast_fade_ms is not None
                           else settings.toast_fade_ms) / 1000

        self._debounce_task: Optional[asyncio.Task] = None
        self._search_tasks: Set[asyncio.Task] = set()
        self._toast_tasks: Set[asyncio.Task] = set()
        self._toast_ids = itertools.count(1)

    async def start(self):
        """Initial page load"""
        await self.load_tasks()
        await self.update_statistics()
        self.show_toast("Welcome to Task Manager!", "info")

    async def close(self):
        """Cancel pending timers and close the HTTP client"""
        pending = self._search_tasks | self._toast_tasks
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._debounce_task = None
        await self.api.aclose()

    # ---- rendering ----

    def render(self):
        self.display.show_tasks(visible_tasks(self.state))

    # ---- loading and searching ----

    async def load_tasks(self):
        """Fetch the list for the current filter and replace the loaded tasks"""
        token = self.state.next_request()
        self.display.set_loading(True)
        try:
            tasks = await self.api.list_tasks(self.state.current_filter)
        except API_ERRORS as e:
            if self.state.is_latest(token):
                logger.error(f"Load tasks error: {e}")
                self.display.show_error("Failed to load tasks. Please refresh the page.")
                self.show_toast("Failed to load tasks", "error")
            return
        finally:
            if self.state.is_latest(token):
                self.display.set_loading(False)

        if not self.state.is_latest(token):
            logger.debug(f"Discarding stale task list (request {token})")
            return
        self.state.tasks = tasks
        self.render()
        self.display.hide_error()

    async def search_tasks(self, query: str):
        """Search by title; an empty query reloads the full list"""
        query = (query or "").strip()
        if not query:
            await self.load_tasks()
            return

        token = self.state.next_request()
        self.display.set_loading(True)
        try:
            tasks = await self.api.search_tasks(query)
        except API_ERRORS as e:
            if self.state.is_latest(token):
                logger.error(f"Search error: {e}")
                self.display.show_error("Search failed. Please try again.")
            return
        finally:
            if self.state.is_latest(token):
                self.display.set_loading(False)

        if not self.state.is_latest(token):
            logger.debug(f"Discarding stale search results for '{query}' (request {token})")
            return
        self.state.tasks = tasks
        self.render()

    def handle_search_input(self, query: str):
        """Debounce keystrokes; only the trailing input after a quiet period searches"""
        if self._debounce_task is not None:
            self._debounce_task.cancel()
        task = asyncio.get_running_loop().create_task(self._debounced_search(query))
        self._debounce_task = task
        self._search_tasks.add(task)
        task.add_done_callback(self._search_tasks.discard)

    async def _debounced_search(self, query: str):
        await asyncio.sleep(self.search_debounce)
        # Past the quiet period the search is no longer cancellable by typing
        self._debounce_task = None
        await self.search_tasks(query)

    async def wait_for_search(self):
        """Wait until pending and in-flight debounced searches finish"""
        while self._search_tasks:
            await asyncio.gather(*list(self._search_tasks), return_exceptions=True)

    def handle_filter(self, task_filter: str):
        """Re-render the loaded tasks under another filter, without a request"""
        if task_filter not in FILTERS:
            raise ValueError(f"Unknown filter: {task_filter}")
        self.state.current_filter = task_filter
        self.display.set_active_filter(task_filter)
        self.render()

    # ---- statistics ----

    async def update_statistics(self):
        try:
            stats = await self.api.get_statistics()
        except API_ERRORS as e:
            logger.error(f"Statistics error: {e}")
            return
        self.display.set_statistics(
            stats.get("totalTasks", 0),
            stats.get("completedTasks", 0),
            stats.get("incompleteTasks", 0)
        )

    # ---- form ----

    def validate_form(self, title: str, description: str) -> bool:
        result = validate_task_form(title, description)
        for field, message in (("title", result.title_error), ("description", result.description_error)):
            if message:
                self.display.show_validation_error(field, message)
            else:
                self.display.clear_validation_error(field)
        return result.is_valid

    async def submit_form(self, title: str, description: str = "") -> bool:
        """
        Create a task, or update the one being edited.

        Returns:
            bool: True when the task was saved
        """
        if not self.validate_form(title, description):
            return False

        task_data = {
            "title": (title or "").strip(),
            "description": (description or "").strip()
        }

        self.display.set_loading(True)
        try:
            if self.state.editing_task_id is not None:
                await self.api.update_task(self.state.editing_task_id, task_data)
                self.show_toast("Task updated successfully!", "success")
                self.cancel_edit()
            else:
                await self.api.create_task(task_data)
                self.show_toast("Task created successfully!", "success")

            self.display.reset_form()
            await self.load_tasks()
            await self.update_statistics()
            return True
        except API_ERRORS as e:
            logger.error(f"Form submission error: {e}")
            self.display.show_error("Failed to save task. Please try again.")
            self.show_toast("Failed to save task", "error")
            return False
        finally:
            self.display.set_loading(False)

    def edit_task(self, task_id: int) -> bool:
        """Enter edit mode for a loaded task"""
        task = self.state.find_task(task_id)
        if task is None:
            return False
        self.state.editing_task_id = task_id
        self.display.fill_form(task.get("title") or "", task.get("description") or "")
        self.display.set_edit_mode(True)
        return True

    def cancel_edit(self):
        self.state.editing_task_id = None
        self.display.reset_form()
        self.display.set_edit_mode(False)

    # ---- task actions ----

    async def toggle_completion(self, task_id: int, completed: bool) -> bool:
        try:
            await self.api.set_completed(task_id, completed)
        except API_ERRORS as e:
            logger.error(f"Toggle task error: {e}")
            self.display.show_error("Failed to update task status.")
            self.show_toast("Failed to update task status", "error")
            return False

        await self.load_tasks()
        await self.update_statistics()
        self.show_toast("Task completed!" if completed else "Task marked as incomplete!", "success")
        return True

    async def _confirmed(self, message: str) -> bool:
        if self.confirm is None:
            logger.warning("No confirmation handler configured; delete declined")
            return False
        answer = self.confirm(message)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def delete_task(self, task_id: int) -> bool:
        """Delete after explicit confirmation"""
        if not await self._confirmed(DELETE_CONFIRMATION):
            return False

        try:
            await self.api.delete_task(task_id)
        except API_ERRORS as e:
            logger.error(f"Delete task error: {e}")
            self.display.show_error("Failed to delete task.")
            self.show_toast("Failed to delete task", "error")
            return False

        await self.load_tasks()
        await self.update_statistics()
        self.show_toast("Task deleted successfully!", "success")
        return True

    # ---- toasts ----

    def show_toast(self, message: str, kind: str = "info") -> Toast:
        """Show a toast that fades after the toast duration and is then removed"""
        toast = Toast(id=f"toast-{next(self._toast_ids)}", message=message, kind=kind)
        self.display.add_toast(toast)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop; the toast stays until removed explicitly
            logger.debug(f"No event loop to expire {toast.id}")
            return toast
        timer = loop.create_task(self._expire_toast(toast.id))
        self._toast_tasks.add(timer)
        timer.add_done_callback(self._toast_tasks.discard)
        return toast

    async def _expire_toast(self, toast_id: str):
        await asyncio.sleep(self.toast_duration)
        self.display.hide_toast(toast_id)
        await asyncio.sleep(self.toast_fade)
        self.display.remove_toast(toast_id)
