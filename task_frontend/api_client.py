"""
HTTP client for the Task API.
"""
import logging
from typing import Any, Dict, List, Optional
import httpx

from .core.config import get_settings

logger = logging.getLogger(__name__)

FILTER_ENDPOINTS = {
    "all": "/tasks",
    "completed": "/tasks/completed",
    "incomplete": "/tasks/incomplete",
}


class TaskApiError(Exception):
    """The API answered with a non-success status"""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class TaskTransportError(Exception):
    """The API could not be reached"""


class TaskApiClient:
    """Async client for the /tasks endpoints"""

    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.task_api_url).rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.request_timeout,
            follow_redirects=True,
            transport=transport
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        default_error: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Send a request and unwrap the JSON body.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            default_error: Message used when the error body carries none

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            TaskApiError: non-2xx response
            TaskTransportError: network failure or timeout
        """
        try:
            response = await self.client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TaskTransportError(default_error) from e

        if not response.is_success:
            message = default_error
            try:
                body = response.json()
                if isinstance(body, dict) and body.get("message"):
                    message = body["message"]
            except ValueError:
                pass
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise TaskApiError(response.status_code, message)

        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()

    async def list_tasks(self, task_filter: str = "all") -> List[Dict[str, Any]]:
        return await self._request("GET", FILTER_ENDPOINTS[task_filter], "Failed to load tasks")

    async def get_task(self, task_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/tasks/{task_id}", "Failed to load task")

    async def create_task(self, task_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/tasks", "Failed to create task", json=task_data)

    async def update_task(self, task_id: int, task_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/tasks/{task_id}", "Failed to update task", json=task_data)

    async def set_completed(self, task_id: int, completed: bool) -> Dict[str, Any]:
        endpoint = "complete" if completed else "incomplete"
        return await self._request(
            "PUT", f"/tasks/{task_id}/{endpoint}", "Failed to toggle task status"
        )

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"/tasks/{task_id}", "Failed to delete task")

    async def search_tasks(self, title: str) -> List[Dict[str, Any]]:
        return await self._request("GET", "/tasks/search", "Search failed", params={"title": title})

    async def get_statistics(self) -> Dict[str, int]:
        return await self._request("GET", "/tasks/statistics", "Failed to load statistics")
