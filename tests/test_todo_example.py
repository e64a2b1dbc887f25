import pytest

from pyselectx import create_store
from todo_actions import Todo, add_todo, complete_todo, delete_todo, sort_todos
from todo_reducers import todos_reducer
from todo_selectors import (
    select_incomplete_todo_messages,
    select_is_todo_completed,
    select_todo,
    select_todo_ids,
    select_todo_message,
)


@pytest.fixture(autouse=True)
def fresh_selectors():
    select_incomplete_todo_messages.cache_clear()
    yield


@pytest.fixture
def store():
    return create_store({"todos": todos_reducer})


def make_state(by_id, all_ids=("a", "b")):
    return {"todos": {"all_ids": list(all_ids), "by_id": by_id}}


def test_incomplete_messages_keep_their_reference():
    a = {"message": "x", "completed": False}
    state = make_state({"a": a, "b": {"message": "y", "completed": True}})
    first = select_incomplete_todo_messages()(state)
    assert first == ["x"]

    # b 換成新的物件但內容相同
    state2 = make_state({"a": a, "b": {"message": "y", "completed": True}})
    assert select_incomplete_todo_messages()(state2) is first


def test_missing_todo_argument_yields_none():
    state = make_state({"a": {"message": "x", "completed": False}})
    assert select_todo({})(state) is None
    assert select_todo_message({})(state) is None


def test_reducer_add_and_ignore_duplicates(store):
    store.dispatch(add_todo("a", "x"))
    state = store.state
    store.dispatch(add_todo("a", "other"))
    assert store.state is state
    assert select_todo_ids()(store.state) == ("a",)
    assert select_todo_message(todo_id="a")(store.state) == "x"


def test_reducer_accepts_todo_models(store):
    store.dispatch(add_todo(Todo(id="m", message="model", completed=True)))
    assert select_is_todo_completed(todo_id="m")(store.state) is True


def test_complete_and_delete(store):
    store.dispatch(add_todo("a", "x"))
    store.dispatch(add_todo("b", "y"))
    store.dispatch(complete_todo("a"))
    assert select_is_todo_completed(todo_id="a")(store.state) is True
    assert select_incomplete_todo_messages()(store.state) == ["y"]

    store.dispatch(delete_todo("a"))
    assert select_todo_ids()(store.state) == ("b",)
    assert select_todo(todo_id="a")(store.state) is None


def test_sort_by_message(store):
    for todo_id, message in [("1", "c"), ("2", "a"), ("3", "b")]:
        store.dispatch(add_todo(todo_id, message))
    store.dispatch(sort_todos())
    assert select_todo_ids()(store.state) == ("2", "3", "1")
    assert select_incomplete_todo_messages()(store.state) == ["a", "b", "c"]


def test_subscribers_skip_structurally_unchanged_results(store):
    seen = []
    store.select(select_incomplete_todo_messages()).subscribe(on_next=seen.append)

    store.dispatch(add_todo("a", "x"))
    store.dispatch(add_todo("b", "y", completed=True))
    store.dispatch(complete_todo("b"))  # 已完成，狀態不變
    store.dispatch(complete_todo("a"))

    assert seen == [[], ["x"], []]
