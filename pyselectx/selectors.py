"""
參數化、記憶化的選擇器組合模組。

一個「參數化選擇器」是兩階段的純函式：

    select_stuff(args)(state) -> result

以相同的參數重複呼叫時，應回傳引用相等的狀態選擇器與結果。

主要函式 combine_selectors 接收多個輸入選擇器與一個組合函式：

    combine_selectors([select_a, select_b], lambda a, b: ...)

大致等同於

    lambda args: lambda state: combiner(select_a(args)(state), select_b(args)(state))

預設不做任何快取。透過選項可開啟三層快取：

- cached=True：以參數快取選擇器實例，並在輸入選擇器的結果
  全部引用相等時直接回傳上一次的結果。
- shallow_equality=True：重新計算後與上一次結果做淺比較，相等則
  回傳舊的引用。隱含 cached=True。
- deep_equality=True：同上，但以序列化做深比較。隱含 cached=True。
"""
import threading
from collections.abc import Mapping
from typing import Any, Dict, Generic, Optional, Sequence, Tuple, Union

from immutables import Map
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .argument_cache import ArgumentCache
from .equality import check_equal, shallow_equal
from .errors import ConfigurationError, handle_error
from .types import Arguments, ArgumentValue, CacheInfo, Combiner, ParameterizedSelectorLike, R, StateSelector

_UNSET: Any = object()


class SelectorOptions(BaseModel):
    """
    combine_selectors 的快取選項。

    同時接受 snake_case 與 camelCase（例如 shallowEquality）的鍵。
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    cached: bool = False
    shallow_equality: bool = False
    deep_equality: bool = False
    # 參數快取的最大條目數，None 表示永不淘汰
    maxsize: Optional[int] = Field(default=None, ge=1)

    @property
    def memoized(self) -> bool:
        """shallow_equality 與 deep_equality 都隱含 cached。"""
        return self.cached or self.shallow_equality or self.deep_equality


def _parse_options(options: Union[SelectorOptions, Dict[str, Any], None], overrides: Dict[str, Any]) -> SelectorOptions:
    if isinstance(options, SelectorOptions) and not overrides:
        return options
    if isinstance(options, SelectorOptions):
        data = options.model_dump()
    else:
        data = dict(options or {})
    data.update(overrides)
    try:
        return SelectorOptions.model_validate(data)
    except ValidationError as err:
        first = err.errors()[0]
        raise ConfigurationError(
            f"無效的選擇器選項: {first['msg']}",
            component="combine_selectors",
            config_key=".".join(str(loc) for loc in first["loc"]),
        ) from err


def _freeze_arguments(args: Any) -> Any:
    # 綁定後呼叫端修改原映射，不得影響已綁定的實例
    if isinstance(args, Map):
        return args
    if isinstance(args, Mapping):
        return Map(args)
    return args


def _merge_arguments(args: Optional[Arguments], kwargs: Dict[str, ArgumentValue]) -> Any:
    frozen = _freeze_arguments(args if args is not None else {})
    if kwargs and isinstance(frozen, Map):
        return frozen.update(kwargs)
    return frozen


def apply_input_selectors(input_selectors: Sequence[ParameterizedSelectorLike[Any]], args: Any, state: Any) -> Tuple[Any, ...]:
    """
    將參數與狀態套用到每個輸入選擇器，依宣告順序回傳結果。
    本身不做任何快取。
    """
    return tuple(selector(args)(state) for selector in input_selectors)


class MemoizedSelector(Generic[R]):
    """
    綁定單一參數集合的記憶化選擇器實例。

    持有上一次的依賴與結果；第一次讀取後進入已初始化狀態。
    每次讀取：

    1. 計算新依賴；
    2. 若已初始化且新舊依賴逐項引用相等，直接回傳舊結果；
    3. 否則執行組合函式並更新依賴；
    4. 依選項比較新舊結果，相等則保留舊引用。
    """

    def __init__(self, input_selectors: Sequence[ParameterizedSelectorLike[Any]], combiner: Combiner[R], args: Any, options: SelectorOptions):
        self._input_selectors = input_selectors
        self._combiner = combiner
        self.args = _freeze_arguments(args)
        self.options = options
        self._last_dependencies: Any = _UNSET
        self._last_result: Any = _UNSET
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._last_dependencies is not _UNSET

    @property
    def last_result(self) -> Optional[R]:
        return None if self._last_result is _UNSET else self._last_result

    def __call__(self, state: Any) -> R:
        with self._lock:
            new_dependencies = apply_input_selectors(self._input_selectors, self.args, state)

            # 輸入未變（Reselect 式快取）
            if self.initialized and shallow_equal(new_dependencies, self._last_dependencies):
                return self._last_result

            new_result = self._combiner(*new_dependencies)
            previously_initialized = self.initialized
            self._last_dependencies = new_dependencies

            # 結果比較，避免回傳內容相同的新引用
            if previously_initialized and check_equal(self._last_result, new_result, self.options):
                return self._last_result

            self._last_result = new_result
            return new_result

    def __repr__(self) -> str:
        return f"MemoizedSelector(args={self.args!r}, initialized={self.initialized})"


class ParameterizedSelector(Generic[R]):
    """
    由 combine_selectors 建立的參數化選擇器。

    以參數（映射或關鍵字參數）呼叫後取得狀態選擇器。
    開啟快取時，編碼相同的參數會取得同一個 MemoizedSelector 實例。
    """

    def __init__(self, input_selectors: Sequence[ParameterizedSelectorLike[Any]], combiner: Combiner[R], options: SelectorOptions, name: Optional[str] = None):
        self._input_selectors = tuple(input_selectors)
        self._combiner = combiner
        self.options = options
        self.name = name or getattr(combiner, "__name__", "selector")
        self._cache: Optional[ArgumentCache[MemoizedSelector[R]]] = (
            ArgumentCache(options.maxsize) if options.memoized else None
        )

    @handle_error
    def __call__(self, args: Optional[Arguments] = None, **kwargs: ArgumentValue) -> StateSelector[R]:
        args = _merge_arguments(args, kwargs)

        # 不快取的捷徑：每次都產生新的閉包，每次讀取都重新計算
        if self._cache is None:
            input_selectors, combiner = self._input_selectors, self._combiner

            def select(state: Any) -> R:
                return combiner(*apply_input_selectors(input_selectors, args, state))
            return select

        return self._cache.get_or_create(
            args,
            lambda: MemoizedSelector(self._input_selectors, self._combiner, args, self.options),
            selector_name=self.name,
        )

    def cache_info(self) -> CacheInfo:
        """回傳參數快取統計；未開啟快取時全部為零。"""
        if self._cache is None:
            return CacheInfo(0, 0, None, 0)
        return self._cache.info()

    def cache_clear(self) -> None:
        """清空參數快取。之後相同參數會得到新的實例，不再保證引用相等。"""
        if self._cache is not None:
            self._cache.clear()

    def __repr__(self) -> str:
        return f"ParameterizedSelector(name={self.name!r}, inputs={len(self._input_selectors)}, memoized={self.options.memoized})"


def combine_selectors(
    input_selectors: Sequence[ParameterizedSelectorLike[Any]],
    combiner: Combiner[R],
    options: Union[SelectorOptions, Dict[str, Any], None] = None,
    *,
    name: Optional[str] = None,
    **option_kwargs: Any,
) -> ParameterizedSelector[R]:
    """
    組合多個參數化選擇器與一個組合函式，產生新的參數化選擇器。

    Args:
        input_selectors: 輸入選擇器序列，順序決定組合函式的參數順序
        combiner: 組合函式，依序接收各輸入選擇器的結果
        options: SelectorOptions 或等價的字典
        name: 選擇器名稱，用於錯誤訊息
        **option_kwargs: 覆蓋 options 的個別選項，例如 shallow_equality=True

    Returns:
        參數化選擇器

    Raises:
        ConfigurationError: 選項無效時

    範例:
        >>> select_todos = combine_selectors([select_root], lambda state: state["todos"])
        >>> select_ids = combine_selectors([select_todos], lambda todos: todos["all_ids"], cached=True)
        >>> select_ids()(state)
    """
    parsed = _parse_options(options, option_kwargs)
    return ParameterizedSelector(input_selectors, combiner, parsed, name=name)


def select_argument(key: str) -> ParameterizedSelectorLike[Optional[ArgumentValue]]:
    """
    選取單一呼叫參數的葉選擇器，忽略狀態。
    參數不存在時回傳 None，不拋出異常。
    """
    def by_arguments(args: Optional[Arguments] = None, **kwargs: ArgumentValue) -> StateSelector[Optional[ArgumentValue]]:
        value = _merge_arguments(args, kwargs).get(key)
        return lambda state: value
    by_arguments.__name__ = f"select_argument_{key}"
    return by_arguments


def _identity(state: Any) -> Any:
    return state


def select_root(args: Optional[Arguments] = None, **kwargs: ArgumentValue) -> StateSelector[Any]:
    """
    選取整個狀態的葉選擇器，忽略參數。

    本身即為參數化選擇器，可直接放入 combine_selectors 的輸入列表。
    """
    return _identity
