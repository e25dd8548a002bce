"""
Client state and the pure logic derived from it.

Nothing here touches the network or a display, so it can be tested directly.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

FILTERS = ("all", "completed", "incomplete")


@dataclass
class ClientState:
    """Everything the task controller remembers between operations"""
    tasks: List[Dict[str, Any]] = field(default_factory=list)
    current_filter: str = "all"
    editing_task_id: Optional[int] = None
    # Sequence token of the most recently issued load/search
    request_seq: int = 0

    def next_request(self) -> int:
        self.request_seq += 1
        return self.request_seq

    def is_latest(self, token: int) -> bool:
        return token == self.request_seq

    def find_task(self, task_id: int) -> Optional[Dict[str, Any]]:
        return next((t for t in self.tasks if t.get("id") == task_id), None)


@dataclass
class FormValidation:
    """Outcome of client-side form validation"""
    title_error: Optional[str] = None
    description_error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.title_error is None and self.description_error is None


def visible_tasks(state: ClientState) -> List[Dict[str, Any]]:
    """
    Tasks to show for the current filter.

    Filtering is applied to whatever list was last loaded, whether it came
    from a filter endpoint or from a search.
    """
    if state.current_filter == "completed":
        return [t for t in state.tasks if t.get("completed")]
    if state.current_filter == "incomplete":
        return [t for t in state.tasks if not t.get("completed")]
    return list(state.tasks)


def validate_title(title: Optional[str]) -> Optional[str]:
    title = (title or "").strip()
    if not title:
        return "Title is required"
    if len(title) > TITLE_MAX_LENGTH:
        return f"Title must be less than {TITLE_MAX_LENGTH} characters"
    return None


def validate_description(description: Optional[str]) -> Optional[str]:
    if len((description or "").strip()) > DESCRIPTION_MAX_LENGTH:
        return f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters"
    return None


def validate_task_form(title: Optional[str], description: Optional[str]) -> FormValidation:
    return FormValidation(
        title_error=validate_title(title),
        description_error=validate_description(description),
    )
