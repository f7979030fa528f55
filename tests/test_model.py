# tests/test_model.py

from __future__ import annotations

from datetime import date

import pytest

from todoctl.engine.model import Task, sanitize_tag


def _task(
    text: str = "Test",
    done: bool = False,
    creation_date: str | None = None,
    completion_date: str | None = None,
) -> Task:
    return (
        Task()
        .set_text(text)
        .set_done(done)
        .set_creation_date(creation_date)
        .set_completion_date(completion_date)
    )


# ---------------------------------------------------------------------
# sanitize_tag
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("weird project  with spaces", "weirdProjectWithSpaces"),
        ("strange CONTEXT with   SPACES", "strangeContextWithSpaces"),
        ("  Leading and trailing  ", "LeadingAndTrailing"),
        ("single", "single"),
        ("tab\tand\nnewline", "tabAndNewline"),
        ("", ""),
        ("   ", ""),
    ],
)
def test_sanitize_tag(raw: str, expected: str) -> None:
    assert sanitize_tag(raw) == expected


def test_sanitize_tag_is_idempotent() -> None:
    once = sanitize_tag("even more silly value")
    assert once == "evenMoreSillyValue"
    assert sanitize_tag(once) == once


# ---------------------------------------------------------------------
# Serialisation through str()
# ---------------------------------------------------------------------

def test_just_text() -> None:
    assert str(_task("Test")) == "Test"


def test_done() -> None:
    assert str(_task("Test", done=True)) == "x Test"


def test_priority() -> None:
    assert str(_task("Test").set_priority("Y")) == "(Y) Test"


def test_done_with_priority_moves_priority_to_meta_token() -> None:
    task = _task("Test", done=True, creation_date="2025-01-01").set_priority("Y")
    assert str(task) == "x 2025-01-01 Test prio:Y"


def test_creation_date() -> None:
    assert str(_task("Test", creation_date="2025-01-01")) == "2025-01-01 Test"


def test_done_with_completion_date() -> None:
    assert str(_task("Test", done=True, completion_date="2025-01-01")) == "x 2025-01-01 Test"


def test_done_with_both_dates() -> None:
    task = _task("Test", done=True, creation_date="2025-02-01", completion_date="2025-01-01")
    assert str(task) == "x 2025-01-01 2025-02-01 Test"


def test_completion_date_is_emitted_on_open_task() -> None:
    task = _task("Test", completion_date="2025-01-01")
    assert str(task) == "2025-01-01 Test"


def test_projects_appended_in_order() -> None:
    task = _task("Test").add_project("TestProject")
    assert str(task) == "Test +TestProject"

    task.add_project("AnotherProject")
    assert str(task) == "Test +TestProject +AnotherProject"


def test_contexts_appended_in_order() -> None:
    task = _task("Test").add_context("Home")
    assert str(task) == "Test @Home"

    task.add_context("work")
    assert str(task) == "Test @Home @work"


def test_meta_appended_in_order() -> None:
    task = _task("Test").add_meta("color", "red")
    assert str(task) == "Test color:red"

    task.add_meta("test", "yes")
    assert str(task) == "Test color:red test:yes"


def test_complex() -> None:
    task = (
        _task("Some longer text", done=True, creation_date="2025-01-01", completion_date="2025-02-01")
        .set_priority("Y")
        .add_project("SomeProject")
        .add_context("SomeContext")
        .add_meta("meta", "no")
    )
    assert str(task) == (
        "x 2025-02-01 2025-01-01 Some longer text +SomeProject @SomeContext meta:no prio:Y"
    )


def test_tag_already_in_text_is_not_repeated() -> None:
    task = _task("Call mom +family @phone").add_project("family").add_context("phone")
    assert str(task) == "Call mom +family @phone"


def test_tag_suppressed_by_substring_of_longer_tag() -> None:
    # Containment is checked on the raw text, not per token.
    task = _task("Fix +Projectile").add_project("Project")
    assert str(task) == "Fix +Projectile"


# ---------------------------------------------------------------------
# Mutators
# ---------------------------------------------------------------------

def test_tag_sanitation() -> None:
    task = _task("Test")
    task.add_project("weird project  with spaces")
    task.add_context("strange CONTEXT with   SPACES")
    task.add_meta("silly key", "even more silly value")

    assert task.projects == ["weirdProjectWithSpaces"]
    assert task.contexts == ["strangeContextWithSpaces"]
    assert task.meta == {"sillyKey": "evenMoreSillyValue"}


def test_duplicates_are_detected_after_sanitising() -> None:
    task = _task("Test").add_project("my proj").add_project("myProj")
    task.add_context("home").add_context("home")

    assert task.projects == ["myProj"]
    assert task.contexts == ["home"]


def test_meta_overwrites_in_place() -> None:
    task = _task("Test").add_meta("a", "1").add_meta("b", "2").add_meta("a", "3")
    assert list(task.meta.items()) == [("a", "3"), ("b", "2")]


def test_mark_done_stamps_completion_date() -> None:
    task = _task("Test").mark_done(date(2025, 3, 14))

    assert task.done is True
    assert task.completion_date == "2025-03-14"
    assert task.creation_date is None


def test_mark_done_defaults_to_today() -> None:
    task = _task("Test").mark_done()
    assert task.completion_date == date.today().isoformat()


def test_priority_lowercase_is_coerced() -> None:
    assert _task().set_priority("b").priority == "B"
    assert Task(priority="c").priority == "C"


def test_priority_can_be_cleared() -> None:
    task = _task().set_priority("A").set_priority(None)
    assert task.priority is None
    assert str(task) == "Test"


@pytest.mark.parametrize("bad", ["", "AB", "1", "(A)", "É"])
def test_priority_rejects_other_shapes(bad: str) -> None:
    task = _task()
    with pytest.raises(ValueError):
        task.set_priority(bad)
    assert task.priority is None

    with pytest.raises(ValueError):
        Task(priority=bad)


def test_tasks_compare_by_identity() -> None:
    assert Task(text="Same") != Task(text="Same")


# ---------------------------------------------------------------------
# clean_text
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "text, expected",
    [
        ("Test +TestProject", "Test"),
        ("Test +TestProject and +anotherProject", "Test +TestProject and"),
        ("Test @Home and @work", "Test @Home and"),
        ("Test color:red and test:yes", "Test color:red and"),
        ("No tags at all", "No tags at all"),
    ],
)
def test_clean_text_strips_trailing_tags(text: str, expected: str) -> None:
    assert Task(text=text).clean_text == expected


def test_clean_text_of_only_tags_returns_full_text() -> None:
    assert Task(text="+a @b c:d").clean_text == "+a @b c:d"


def test_clean_text_of_empty_text() -> None:
    assert Task(text="").clean_text == ""
