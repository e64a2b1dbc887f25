"""
PySelectX 共用類型定義模組。

集中定義選擇器、Action 與 Reducer 相關的泛型參數與類型別名，
供其他模組引用。
"""
from typing import Any, Callable, Mapping, NamedTuple, Optional, TypeVar, Union

from typing_extensions import Protocol

# ———— 泛型參數 ————
S = TypeVar("S")  # 狀態類型
R = TypeVar("R")  # 選擇器結果類型
P = TypeVar("P")  # Action 負載類型
R_co = TypeVar("R_co", covariant=True)

# ———— 參數相關 ————
# 可作為選擇器參數的值，僅限可序列化的純量
ArgumentValue = Union[str, int, float, bool, None]
Arguments = Mapping[str, ArgumentValue]

# ———— 選擇器相關 ————
StateSelector = Callable[[Any], R]
Combiner = Callable[..., R]


class ParameterizedSelectorLike(Protocol[R_co]):
    """
    參數化選擇器協議：以參數取得一個狀態選擇器。

    combine_selectors 的輸入、select_argument 與 select_root 都符合此協議。
    """

    def __call__(self, args: Optional[Arguments] = None, **kwargs: ArgumentValue) -> StateSelector[R_co]:
        ...


class CacheInfo(NamedTuple):
    """參數快取的統計資訊，欄位與 functools.lru_cache 一致。"""
    hits: int
    misses: int
    maxsize: Optional[int]
    currsize: int


# ———— Action / Reducer 相關 ————
Reducer = Callable[[S, Any], S]
