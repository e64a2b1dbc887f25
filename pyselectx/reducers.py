"""
Reducer 建構模組。

以 create_reducer 與 on 描述單一功能模組的狀態變化，
再以 combine_reducers 合併成 Store 使用的根 reducer。
"""
from typing import Callable, Dict

from immutables import Map

from .actions import Action
from .errors import ReducerError
from .types import Reducer, S


def create_reducer(initial_state: S, *handlers) -> Reducer[S]:
    """
    創建一個 reducer 函式，用於處理狀態變更。

    Args:
        initial_state: 初始狀態。
        *handlers: 一系列 (action_type, handler_fn) 元組或使用 on 函式創建的處理器。

    Returns:
        一個 reducer 函式，沒有對應處理器的 action 會原樣回傳狀態。
    """
    action_handlers: Dict[str, Callable[[S, Action], S]] = {}

    for handler in handlers:
        if isinstance(handler, tuple) and len(handler) == 2:
            action_type, handler_fn = handler
            action_handlers[action_type] = handler_fn
        else:
            action_handlers.update(handler)

    def reducer(state: S = initial_state, action: Action = None) -> S:
        if action is None:
            return state
        handler = action_handlers.get(action.type)
        if handler:
            return handler(state, action)
        return state

    reducer.initial_state = initial_state
    reducer.handlers = action_handlers
    return reducer


def on(action_creator_or_type, handler):
    """
    創建一個 action 類型與處理函式的映射。

    Args:
        action_creator_or_type: Action 創建器函式或 Action 類型字串。
        handler: 處理該 Action 的函式，接收 (state, action) 並返回新狀態。
    """
    if callable(action_creator_or_type) and hasattr(action_creator_or_type, 'type'):
        action_type = action_creator_or_type.type
    else:
        action_type = str(action_creator_or_type)
    return {action_type: handler}


def combine_reducers(reducers: Dict[str, Reducer]) -> Reducer[Map]:
    """
    將多個功能模組的 reducer 合併為根 reducer。

    根狀態是一個 immutables.Map；任何切片都沒有變化時回傳原本的根狀態，
    讓下游可以用引用比較判斷是否需要更新。

    Args:
        reducers: 功能模組鍵到 reducer 的映射。
    """
    reducers = dict(reducers)

    def root_reducer(state: Map = None, action: Action = None) -> Map:
        if state is None:
            state = Map()
        mutation = state.mutate()
        changed = False
        for feature_key, reducer in reducers.items():
            prev_substate = state.get(feature_key, getattr(reducer, 'initial_state', None))
            try:
                next_substate = reducer(prev_substate, action)
            except Exception as err:
                raise ReducerError(
                    f"Reducer 執行失敗: {err}",
                    reducer_name=feature_key,
                    action_type=getattr(action, 'type', repr(action)),
                ) from err
            if feature_key not in state or next_substate is not prev_substate:
                mutation[feature_key] = next_substate
                changed = True
        return mutation.finish() if changed else state

    root_reducer.initial_state = Map()
    root_reducer.reducers = reducers
    return root_reducer
