"""
PySelectX 的 Action 定義模組。

Actions 是描述狀態變更意圖的不可變對象，由 Store 交給 reducer 處理。
"""
from typing import Any, Callable, Dict, Generic, Optional, Union

from immutables import Map

from .errors import ActionError
from .types import P


class Action(Generic[P]):
    """
    表示一個有類型和可選負載的動作。

    屬性:
        type: 動作的類型字符串
        payload: 動作的負載數據（可選）
    """
    __slots__ = ('type', 'payload')

    def __init__(self, type: str, payload: Optional[P] = None):
        if not isinstance(type, str) or not type:
            raise ActionError("Action 類型必須是非空字串", action_type=repr(type), payload=payload)
        object.__setattr__(self, 'type', type)
        object.__setattr__(self, 'payload', payload)

    def __setattr__(self, name, value):
        raise AttributeError(f"Cannot modify immutable instance attribute '{name}'")

    def __eq__(self, other):
        if not isinstance(other, Action):
            return False
        return self.type == other.type and self.payload == other.payload

    def __hash__(self):
        return hash((self.type, self.payload))

    def __repr__(self):
        return f"Action(type='{self.type}', payload={self.payload!r})"


def _process_payload(payload: Any) -> Any:
    """字典負載轉為 immutables.Map，避免 reducer 意外修改。"""
    if isinstance(payload, dict):
        return Map(payload)
    return payload


def create_action(action_type: str, prepare_fn: Optional[Callable[..., Any]] = None) -> Callable[..., Action[Any]]:
    """
    創建一個 Action 生成器函數。

    Args:
        action_type: Action 的類型標識符
        prepare_fn: 可選的預處理函數，用於在創建 Action 前處理輸入參數

    Returns:
        一個可調用的函數，用於生成指定類型的 Action，並帶有 type 屬性

    範例:
        >>> complete_todo = create_action("[Todos] Complete", lambda todo_id: todo_id)
        >>> complete_todo("a")  # Action(type="[Todos] Complete", payload='a')
    """
    def action_creator(*args: Any, **kwargs: Any) -> Action[Any]:
        if prepare_fn:
            return Action(action_type, _process_payload(prepare_fn(*args, **kwargs)))
        if len(args) == 1 and not kwargs:
            return Action(action_type, _process_payload(args[0]))
        if args or kwargs:
            payload: Dict[Union[int, str], Any] = dict(zip(range(len(args)), args))
            payload.update(kwargs)
            return Action(action_type, _process_payload(payload))
        return Action(action_type)

    action_creator.type = action_type  # type: ignore
    action_creator.__name__ = action_type
    return action_creator


# 根 Actions
init_store = create_action("[Root] Init Store")
