"""
選擇器結果與依賴的比較策略。

提供三種由淺到深的比較函式：引用比較、淺比較與序列化深比較。
所有策略都不會拋出異常，內部錯誤一律視為「不相等」。
"""
import json
from collections.abc import Mapping
from typing import Any

from .immutable_utils import to_dict

# Python 會重新配置相等的純量，這些類型的「引用」即為其值
_SCALAR_TYPES = (str, int, float, bool, bytes, type(None))


def reference_equal(a: Any, b: Any) -> bool:
    """同一對象，或同類型且值相等的純量。"""
    if a is b:
        return True
    try:
        return type(a) is type(b) and isinstance(a, _SCALAR_TYPES) and a == b
    except Exception:
        return False


def shallow_equal(a: Any, b: Any) -> bool:
    """
    淺比較：兩個映射擁有相同的鍵且各值引用相等，
    或兩個序列長度相同且各元素引用相等。只比較一層。
    """
    if reference_equal(a, b):
        return True
    try:
        if isinstance(a, Mapping) and isinstance(b, Mapping):
            if len(a) != len(b):
                return False
            for key in a:
                if key not in b or not reference_equal(a[key], b[key]):
                    return False
            return True
        if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
            if type(a) is not type(b) or len(a) != len(b):
                return False
            return all(reference_equal(x, y) for x, y in zip(a, b))
    except Exception:
        return False
    return False


def _serialize(value: Any) -> str:
    return json.dumps(to_dict(value), sort_keys=True, allow_nan=True)


def deep_equal(a: Any, b: Any) -> bool:
    """序列化後比較結構；無法序列化（函式、循環引用等）時視為不相等。"""
    if reference_equal(a, b):
        return True
    try:
        return _serialize(a) == _serialize(b)
    except Exception:
        return False


def check_equal(previous: Any, new: Any, options: Any) -> bool:
    """
    依選項判斷新結果是否可以沿用舊結果。

    先做引用比較，再依序嘗試已開啟的 shallow_equality 與 deep_equality，
    任一通過即視為相等。
    """
    if reference_equal(previous, new):
        return True
    if options.shallow_equality and shallow_equal(previous, new):
        return True
    if options.deep_equality and deep_equal(previous, new):
        return True
    return False
