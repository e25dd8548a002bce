from datetime import datetime, timedelta, timezone

import pytest

from task_service.core.exceptions import TaskNotFoundError
from task_service.models import task as task_model


@pytest.fixture()
def ticking_clock(monkeypatch):
    """Each timestamp request advances one second"""
    start = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    monkeypatch.setattr(task_model, "utcnow", lambda: start + timedelta(seconds=next(ticks)))


def test_create_task_defaults(service):
    task = service.create_task("Buy milk", "2 litres")

    assert task.id is not None
    assert task.title == "Buy milk"
    assert task.description == "2 litres"
    assert task.completed is False
    assert task.created_at == task.updated_at


def test_create_then_get(service):
    created = service.create_task("Read book")

    fetched = service.get_task(created.id)

    assert fetched.id == created.id
    assert fetched.title == "Read book"
    assert fetched.description is None


def test_get_missing_task_raises(service):
    with pytest.raises(TaskNotFoundError) as exc:
        service.get_task(42)

    assert exc.value.task_id == 42
    assert str(exc.value) == "Task not found with id: 42"


def test_list_tasks_newest_first(service):
    service.create_task("old")
    service.create_task("new")

    assert [t.title for t in service.list_tasks()] == ["new", "old"]


def test_update_applies_only_provided_fields(service):
    task = service.create_task("Original", "Keep me")

    updated = service.update_task(task.id, completed=True)

    assert updated.completed is True
    assert updated.title == "Original"
    assert updated.description == "Keep me"


def test_update_completed_refreshes_updated_at(service, ticking_clock):
    task = service.create_task("Tick", "tock")
    created_at = task.created_at

    updated = service.update_task(task.id, completed=True)

    assert updated.created_at == created_at
    assert updated.updated_at > created_at
    assert updated.title == "Tick"
    assert updated.description == "tock"


def test_update_blank_title_keeps_existing(service):
    task = service.create_task("Original")

    updated = service.update_task(task.id, title="   ", description="  new text  ")

    assert updated.title == "Original"
    assert updated.description == "new text"


def test_update_trims_title(service):
    task = service.create_task("Original")

    assert service.update_task(task.id, title="  Renamed  ").title == "Renamed"


def test_update_missing_task_raises(service):
    with pytest.raises(TaskNotFoundError):
        service.update_task(7, title="nope")


def test_mark_completed_and_incomplete(service):
    task = service.create_task("Toggle me")

    assert service.mark_completed(task.id).completed is True
    assert service.mark_incomplete(task.id).completed is False


@pytest.mark.parametrize("operation", ["mark_completed", "mark_incomplete", "delete_task"])
def test_operations_on_missing_task_raise(service, operation):
    with pytest.raises(TaskNotFoundError):
        getattr(service, operation)(99)


def test_delete_then_get_raises(service):
    task = service.create_task("Short lived")

    service.delete_task(task.id)

    with pytest.raises(TaskNotFoundError):
        service.get_task(task.id)


def test_completed_and_incomplete_lists(service):
    done = service.create_task("done")
    service.mark_completed(done.id)
    service.create_task("open")

    assert [t.title for t in service.list_completed()] == ["done"]
    assert [t.title for t in service.list_incomplete()] == ["open"]


def test_search_by_title(service):
    service.create_task("Buy milk")
    service.create_task("Call mom")

    assert [t.title for t in service.search_by_title("MILK")] == ["Buy milk"]
    assert service.search_by_title("xyz") == []


def test_statistics_add_up(service):
    for title in ("a", "b", "c"):
        service.create_task(title)
    service.mark_completed(service.list_tasks()[0].id)

    stats = service.statistics()

    assert (stats.total, stats.completed, stats.incomplete) == (3, 1, 2)
    assert stats.total == stats.completed + stats.incomplete
