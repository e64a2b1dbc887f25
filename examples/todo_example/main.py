from todo_store import store
from todo_actions import add_todo, complete_todo, delete_todo, sort_todos
from todo_selectors import (
    select_incomplete_todo_messages,
    select_is_todo_completed,
    select_todo_ids,
)

if __name__ == "__main__":
    # 訂閱選擇結果變化；結果引用不變時不會通知
    store.select(select_incomplete_todo_messages()).subscribe(
        on_next=lambda messages: print(f"未完成事項: {messages}")
    )
    store.select(select_todo_ids()).subscribe(
        on_next=lambda ids: print(f"事項順序: {list(ids)}")
    )
    store.select(select_is_todo_completed(todo_id="milk")).subscribe(
        on_next=lambda done: print(f"milk 已完成: {done}")
    )

    print("\n==== 新增事項 ====")
    store.dispatch(add_todo("milk", "Buy milk"))
    store.dispatch(add_todo("code", "Write code"))
    store.dispatch(add_todo("bike", "Fix bike"))

    print("\n==== 排序（未完成清單內容改變順序） ====")
    store.dispatch(sort_todos())

    print("\n==== 完成與刪除 ====")
    store.dispatch(complete_todo("milk"))
    store.dispatch(delete_todo("code"))

    print("\n==== 最終狀態 ====")
    print(store.state)
    print(select_incomplete_todo_messages.cache_info())
