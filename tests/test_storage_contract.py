"""
Behaviour every storage engine must share.

Runs against the SQLite relational engine and the MongoDB document engine.
"""
import pytest

from todostore.exceptions import NotFoundError, ValidationError
from todostore.models import Todo


def _fields(todo):
    return (todo.title, todo.description, todo.completed)


def test_create_assigns_id_and_round_trips(engine):
    """Scenario: created todo gets an ID and reads back identically."""
    todo = Todo(title="Buy milk", description="2%", completed=False)

    created = engine.create(todo)

    assert created.id
    assert created.is_persisted
    fetched = engine.retrieve_by_id(created.id)
    assert fetched is not None
    assert fetched.id == created.id
    assert _fields(fetched) == ("Buy milk", "2%", False)


def test_create_does_not_mutate_input(engine):
    todo = Todo(title="Buy milk")

    engine.create(todo)

    assert todo.id is None


def test_create_rejects_persisted_todo(engine):
    created = engine.create(Todo(title="once"))

    with pytest.raises(ValidationError):
        engine.create(created)


def test_update_title_only_keeps_other_fields(engine):
    """Scenario: changing only the title leaves description and completed alone."""
    created = engine.create(Todo(title="Buy milk", description="2%", completed=False))

    engine.update(created.model_copy(update={"title": "Buy milk and eggs"}))

    fetched = engine.retrieve_by_id(created.id)
    assert fetched.title == "Buy milk and eggs"
    assert fetched.description == "2%"
    assert fetched.completed is False


def test_update_replaces_all_fields(engine):
    created = engine.create(Todo(title="a", description="b", completed=False))

    engine.update(Todo(id=created.id, title="x", description="y", completed=True))

    assert _fields(engine.retrieve_by_id(created.id)) == ("x", "y", True)


def test_update_with_same_values_succeeds(engine):
    created = engine.create(Todo(title="same", description="same"))

    engine.update(created)

    assert _fields(engine.retrieve_by_id(created.id)) == ("same", "same", False)


def test_update_without_id_raises_validation_error(engine):
    with pytest.raises(ValidationError):
        engine.update(Todo(title="no id"))


def test_retrieved_copy_is_detached_from_store(engine):
    created = engine.create(Todo(title="original"))
    fetched = engine.retrieve_by_id(created.id)

    fetched.title = "changed locally"

    assert engine.retrieve_by_id(created.id).title == "original"


def test_delete_then_retrieve_is_absent(engine):
    """Scenario: deleted todo can no longer be retrieved."""
    created = engine.create(Todo(title="Buy milk"))

    engine.delete(created.id)

    assert engine.retrieve_by_id(created.id) is None


def test_delete_is_idempotent(engine):
    created = engine.create(Todo(title="twice"))

    engine.delete(created.id)
    engine.delete(created.id)

    assert engine.retrieve_by_id(created.id) is None


def test_delete_leaves_other_todos(engine):
    keep = engine.create(Todo(title="keep"))
    drop = engine.create(Todo(title="drop"))

    engine.delete(drop.id)

    assert [t.id for t in engine.retrieve_all()] == [keep.id]


def test_retrieve_all_empty(engine):
    """Scenario: empty backend lists nothing."""
    assert engine.retrieve_all() == []


def test_retrieve_all_returns_every_created_todo(engine):
    created = [engine.create(Todo(title=f"todo {i}", description=str(i))) for i in range(5)]

    listed = engine.retrieve_all()

    assert len(listed) == 5
    assert {(t.id, t.title, t.description) for t in listed} == {
        (t.id, t.title, t.description) for t in created
    }


def test_ids_are_unique(engine):
    ids = {engine.create(Todo(title="same title")).id for _ in range(4)}

    assert len(ids) == 4


@pytest.mark.parametrize("bad_id", ["not-an-id", "zzz-invalid", "", "12 34", "1.5"])
def test_malformed_id_on_retrieve_raises_validation_error(engine, bad_id):
    """Scenario: malformed IDs are a validation error, never 'absent'."""
    with pytest.raises(ValidationError):
        engine.retrieve_by_id(bad_id)


def test_malformed_id_on_delete_raises_validation_error(engine):
    with pytest.raises(ValidationError):
        engine.delete("not-an-id")


def test_malformed_id_on_update_raises_validation_error(engine):
    with pytest.raises(ValidationError):
        engine.update(Todo(id="not-an-id", title="x"))


def test_malformed_id_is_not_reported_as_not_found(engine):
    with pytest.raises(ValidationError) as exc_info:
        engine.retrieve_by_id("not-an-id")

    assert not isinstance(exc_info.value, NotFoundError)
    assert exc_info.value.field == "id"


def test_well_formed_unknown_id_is_absent(engine):
    created = engine.create(Todo(title="t"))
    engine.delete(created.id)

    assert engine.retrieve_by_id(created.id) is None


def test_update_missing_id_raises_not_found(engine):
    """Scenario: updating an ID that was never created is NotFoundError."""
    created = engine.create(Todo(title="t"))
    engine.delete(created.id)

    with pytest.raises(NotFoundError) as exc_info:
        engine.update(Todo(id=created.id, title="x", description="y", completed=True))

    assert exc_info.value.resource_id == created.id


def test_engine_is_a_context_manager(engine):
    with engine as opened:
        assert opened is engine
