from immutables import Map
from pyselectx import create_reducer, on
from todo_actions import add_todo, delete_todo, complete_todo, sort_todos

# ====== Initial State ======
# 與 entity 集合相同的形狀：all_ids 保存順序，by_id 保存實體
initial_state = Map({"all_ids": (), "by_id": Map()})


# ====== Handlers ======
def add_todo_handler(state: Map, action) -> Map:
    todo = action.payload
    todo_id = todo["id"]
    if todo_id in state["by_id"]:
        return state
    return state.update({
        "all_ids": state["all_ids"] + (todo_id,),
        "by_id": state["by_id"].set(todo_id, todo),
    })


def delete_todo_handler(state: Map, action) -> Map:
    todo_id = action.payload
    if todo_id not in state["by_id"]:
        return state
    return state.update({
        "all_ids": tuple(i for i in state["all_ids"] if i != todo_id),
        "by_id": state["by_id"].delete(todo_id),
    })


def complete_todo_handler(state: Map, action) -> Map:
    todo_id = action.payload
    todo = state["by_id"].get(todo_id)
    if todo is None or todo["completed"]:
        return state
    return state.set("by_id", state["by_id"].set(todo_id, todo.set("completed", True)))


def sort_todos_handler(state: Map, action) -> Map:
    by_id = state["by_id"]
    sorted_ids = tuple(sorted(state["all_ids"], key=lambda i: by_id[i]["message"]))
    if sorted_ids == state["all_ids"]:
        return state
    return state.set("all_ids", sorted_ids)


# ====== Reducer ======
todos_reducer = create_reducer(
    initial_state,
    on(add_todo, add_todo_handler),
    on(delete_todo, delete_todo_handler),
    on(complete_todo, complete_todo_handler),
    on(sort_todos, sort_todos_handler),
)
