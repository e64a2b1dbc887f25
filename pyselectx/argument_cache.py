"""
以參數為鍵的選擇器實例快取。

參數集合先經過正規化編碼（排序鍵後的 JSON），相同編碼的參數
共用同一個記憶化選擇器實例。預設不淘汰任何條目；指定 maxsize
後改為 LRU，此時被淘汰的參數再次出現會得到新的實例。
"""
import json
import math
import threading
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any, Callable, Generic, Optional, TypeVar

from .errors import ArgumentsEncodingError
from .types import CacheInfo

V = TypeVar("V")

_ALLOWED_TYPES = (str, int, float, bool, type(None))


def encode_arguments(args: Any, selector_name: Optional[str] = None) -> str:
    """
    將參數集合編碼為與插入順序無關的字串鍵。

    Args:
        args: 參數映射，值必須是 str / int / float / bool / None
        selector_name: 用於錯誤訊息的選擇器名稱

    Returns:
        正規化的 JSON 字串

    Raises:
        ArgumentsEncodingError: 參數無法正規化編碼時
    """
    if args is None:
        return "{}"
    if not isinstance(args, Mapping):
        raise ArgumentsEncodingError(
            f"選擇器參數必須是映射，收到 {type(args).__name__}",
            selector_name=selector_name, arguments=args,
        )

    for key, value in args.items():
        if not isinstance(key, str):
            raise ArgumentsEncodingError(
                f"參數鍵必須是字串，收到 {key!r}",
                selector_name=selector_name, arguments=args,
            )
        if not isinstance(value, _ALLOWED_TYPES):
            raise ArgumentsEncodingError(
                f"參數 '{key}' 的值無法序列化: {type(value).__name__}",
                selector_name=selector_name, arguments=args,
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise ArgumentsEncodingError(
                f"參數 '{key}' 的值不是有限數值: {value!r}",
                selector_name=selector_name, arguments=args,
            )

    return json.dumps(dict(args), sort_keys=True, separators=(",", ":"))


class ArgumentCache(Generic[V]):
    """
    參數編碼到選擇器實例的映射。

    Attributes:
        maxsize: 最大條目數，None 表示不限（條目永不淘汰）
    """

    def __init__(self, maxsize: Optional[int] = None):
        self.maxsize = maxsize
        self._entries: "OrderedDict[str, V]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get_or_create(self, args: Any, factory: Callable[[], V], selector_name: Optional[str] = None) -> V:
        """
        取得參數對應的實例，不存在時以 factory 建立並存入。

        編碼失敗時直接拋出，快取內容不受影響。
        """
        key = encode_arguments(args, selector_name)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._hits += 1
                if self.maxsize is not None:
                    self._entries.move_to_end(key)
                return entry

            self._misses += 1
            entry = factory()
            self._entries[key] = entry
            if self.maxsize is not None:
                while len(self._entries) > self.maxsize:
                    self._entries.popitem(last=False)
            return entry

    def __contains__(self, args: Any) -> bool:
        return encode_arguments(args) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def info(self) -> CacheInfo:
        return CacheInfo(self._hits, self._misses, self.maxsize, len(self._entries))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
