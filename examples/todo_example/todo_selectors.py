from pyselectx import combine_selectors, select_argument, select_root

# 定義Selectors
select_todos = combine_selectors(
    [select_root],
    lambda state: state["todos"],
)

select_todo = combine_selectors(
    [select_todos, select_argument("todo_id")],
    lambda todos, todo_id: todos["by_id"].get(todo_id),
)

select_todo_ids = combine_selectors(
    [select_todos],
    lambda todos: todos["all_ids"],
)

select_todo_message = combine_selectors(
    [select_todo],
    lambda todo: todo["message"] if todo is not None else None,
)

select_is_todo_completed = combine_selectors(
    [select_todo],
    lambda todo: todo["completed"] if todo is not None else None,
)


# 衍生資料：每次都會產生新的列表，以淺比較保留舊引用
def incomplete_messages(todos):
    messages = []
    for todo_id in todos["all_ids"]:
        todo = todos["by_id"][todo_id]
        if not todo["completed"]:
            messages.append(todo["message"])
    return messages


select_incomplete_todo_messages = combine_selectors(
    [select_todos],
    incomplete_messages,
    shallow_equality=True,
)
