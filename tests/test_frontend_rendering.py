from datetime import datetime, timedelta, timezone

from task_frontend.display import HtmlPage
from task_frontend.rendering import (
    Toast, char_count_label, char_count_severity, escape_html, format_date,
    render_task_item, render_toast,
)
from task_frontend.state import ClientState, validate_task_form, visible_tasks

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)

TASKS = [
    {"id": 1, "title": "open", "completed": False},
    {"id": 2, "title": "done", "completed": True},
    {"id": 3, "title": "also open", "completed": False},
]


def test_visible_tasks_per_filter():
    state = ClientState(tasks=list(TASKS))

    assert [t["id"] for t in visible_tasks(state)] == [1, 2, 3]
    state.current_filter = "completed"
    assert [t["id"] for t in visible_tasks(state)] == [2]
    state.current_filter = "incomplete"
    assert [t["id"] for t in visible_tasks(state)] == [1, 3]


def test_visible_tasks_filters_whatever_was_loaded():
    # Search results replace the list; filters narrow that list
    state = ClientState(tasks=[TASKS[1]], current_filter="incomplete")

    assert visible_tasks(state) == []


def test_request_tokens():
    state = ClientState()
    first = state.next_request()
    second = state.next_request()

    assert not state.is_latest(first)
    assert state.is_latest(second)


def test_form_validation():
    assert validate_task_form("Title", "").is_valid
    assert validate_task_form("a" * 100, "d" * 500).is_valid

    blank = validate_task_form("   ", None)
    assert blank.title_error == "Title is required"
    assert not blank.is_valid

    too_long = validate_task_form("a" * 101, "d" * 501)
    assert too_long.title_error == "Title must be less than 100 characters"
    assert too_long.description_error == "Description must be less than 500 characters"


def test_escape_html():
    assert escape_html("""<a href="x">'&'</a>""") == "&lt;a href=&quot;x&quot;&gt;&#x27;&amp;&#x27;&lt;/a&gt;"
    assert escape_html(None) == ""


def test_render_escapes_script_title():
    html = render_task_item({
        "id": 9,
        "title": "<script>alert(1)</script>",
        "description": "<img src=x onerror=alert(2)>",
        "completed": False,
        "createdAt": NOW.isoformat(),
    }, NOW)

    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "<script>" not in html
    assert "<img" not in html


def test_render_task_item_status_and_description():
    done = render_task_item({"id": 1, "title": "t", "description": None, "completed": True}, NOW)
    assert 'class="task-item completed"' in done
    assert "checked" in done
    assert "Completed" in done
    assert "task-description" not in done

    pending = render_task_item({"id": 2, "title": "t", "description": "d", "completed": False}, NOW)
    assert "Pending" in pending
    assert '<p class="task-description">d</p>' in pending


def test_format_date():
    assert format_date(NOW.isoformat(), NOW) == "Today"
    assert format_date((NOW - timedelta(days=1, hours=2)).isoformat(), NOW) == "Yesterday"
    assert format_date((NOW - timedelta(days=3)).isoformat(), NOW) == "3 days ago"
    assert format_date("2024-04-01T08:00:00", NOW) == "2024-04-01"
    assert format_date("not a date", NOW) == ""
    assert format_date(None, NOW) == ""


def test_char_count():
    assert char_count_label("hello") == "5/500"
    assert char_count_severity("x" * 400) == "normal"
    assert char_count_severity("x" * 401) == "warning"
    assert char_count_severity("x" * 451) == "error"


def test_render_toast_escapes_message():
    html = render_toast(Toast(id="toast-1", message="<b>hi</b>", kind="error"))

    assert 'class="toast error show"' in html
    assert "fa-exclamation-circle" in html
    assert "&lt;b&gt;hi&lt;/b&gt;" in html


def test_html_page_render():
    page = HtmlPage(clock=lambda: NOW)
    page.show_tasks([{"id": 1, "title": "<i>x</i>", "completed": False}])
    page.set_statistics(3, 1, 2)
    page.show_error("Boom & co")
    page.set_edit_mode(True)
    page.fill_form('say "hi"', "desc")

    html = page.render()

    assert '<span id="totalTasks">3</span>' in html
    assert '<span id="remainingTasks">2</span>' in html
    assert "Boom &amp; co" in html
    assert "Update Task" in html
    assert 'value="say &quot;hi&quot;"' in html
    assert "&lt;i&gt;x&lt;/i&gt;" in html
    assert page.empty_state_visible is False

    page.show_tasks([])
    assert page.empty_state_visible is True
