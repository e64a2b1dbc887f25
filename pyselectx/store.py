"""
PySelectX 的 Store 模組。

Store 保存不可變的根狀態，分發 Action 給根 reducer，
並以 reactivex 的可觀察對象提供狀態與選擇結果的變化。
"""
from typing import Any, Callable, Dict, Generic

from reactivex import Observable, operators as ops
from reactivex.subject import BehaviorSubject

from .actions import Action, init_store
from .equality import reference_equal
from .errors import PySelectXError, StoreError, global_error_handler
from .reducers import combine_reducers
from .types import Reducer, S


class Store(Generic[S]):
    """
    狀態容器，管理應用狀態並通知訂閱者狀態變更。

    選擇器只讀取 Store 的狀態；Store 不知道選擇器的快取機制，
    但 select 會用引用比較過濾重複的結果，因此記憶化選擇器
    回傳相同引用時不會產生多餘的通知。
    """

    def __init__(self):
        self._reducer: Reducer = combine_reducers({})
        self._state = self._reducer(None, init_store())
        # 狀態流，新訂閱者會立即收到當前狀態
        self._state_subject = BehaviorSubject(self._state)
        self._dispatching = False

    def register_root(self, root_reducers: Dict[str, Reducer]) -> "Store[S]":
        """
        註冊應用的根級 reducers，並以 init_store 初始化狀態。

        Args:
            root_reducers: 特性鍵名到 reducer 的映射字典。
        """
        self._reducer = combine_reducers(root_reducers)
        self._update_state(self._reducer(None, init_store()))
        return self

    def dispatch(self, action: Action) -> Action:
        """
        分發一個動作，觸發狀態更新。

        Args:
            action: 要分發的 Action 物件。

        Returns:
            傳入的 Action。
        """
        if self._dispatching:
            raise StoreError("reducer 執行期間不可再次 dispatch", operation="dispatch",
                             action_type=getattr(action, "type", None))
        self._dispatching = True
        try:
            new_state = self._reducer(self._state, action)
        except PySelectXError as err:
            global_error_handler.handle(err)
            raise
        finally:
            self._dispatching = False
        self._update_state(new_state)
        return action

    def _update_state(self, new_state) -> None:
        if new_state is self._state:
            return
        self._state = new_state
        self._state_subject.on_next(new_state)

    def select(self, selector: Callable[[S], Any] = None) -> Observable:
        """
        選擇狀態的一部分進行觀察。

        Args:
            selector: 狀態選擇器，例如 select_todo_ids()；省略時觀察整個狀態。

        Returns:
            一個可觀察對象，只在選取結果的引用改變時發出。
        """
        if selector is None:
            return self._state_subject.pipe(ops.distinct_until_changed(comparer=reference_equal))

        return self._state_subject.pipe(
            ops.map(selector),
            ops.distinct_until_changed(comparer=reference_equal),
        )

    def subscribe(self, on_next: Callable[[S], None], **kwargs):
        """訂閱原始狀態流。"""
        return self._state_subject.subscribe(on_next=on_next, **kwargs)

    @property
    def state(self) -> S:
        """
        獲取當前狀態的快照。
        """
        return self._state


def create_store(reducers: Dict[str, Reducer] = None) -> Store:
    """
    創建一個新的 Store 實例，可選擇直接註冊根 reducers。
    """
    store = Store()
    if reducers:
        store.register_root(reducers)
    return store
