"""
Tests for the Todo model.
"""
import pydantic
import pytest

from todostore.models import Todo


def test_defaults():
    todo = Todo(title="Buy milk")

    assert todo.id is None
    assert todo.description == ""
    assert todo.completed is False
    assert not todo.is_persisted


def test_with_id_returns_copy():
    todo = Todo(title="Buy milk")

    saved = todo.with_id("7")

    assert saved.id == "7"
    assert saved.is_persisted
    assert todo.id is None


def test_title_is_required():
    with pytest.raises(pydantic.ValidationError):
        Todo()


def test_assignment_is_validated():
    todo = Todo(title="t")

    with pytest.raises(pydantic.ValidationError):
        todo.completed = "not a bool"


def test_to_dict():
    assert Todo(id="1", title="t", description="d", completed=True).to_dict() == {
        "id": "1",
        "title": "t",
        "description": "d",
        "completed": True,
    }


def test_str():
    assert str(Todo(id="1", title="Buy milk", description="2%")) == "[ ] #1: Buy milk - 2%"
    assert str(Todo(id="2", title="Done", completed=True)) == "[x] #2: Done"
