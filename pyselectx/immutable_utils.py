"""
狀態樹在 immutables.Map 與一般 Python 結構之間的轉換。

Store 中的狀態以 Map 與 tuple 保存；deep_equal 需要把它們還原成
可以 JSON 序列化的 dict 與 list。
"""
from typing import Any

from immutables import Map
from pydantic import BaseModel


def to_immutable(obj: Any) -> Any:
    """把 pydantic 模型、dict 與 list 遞迴轉成 Map 與 tuple，其他值原樣回傳。"""
    if isinstance(obj, BaseModel):
        obj = obj.model_dump()
    if isinstance(obj, (dict, Map)):
        return Map((k, to_immutable(v)) for k, v in obj.items())
    if isinstance(obj, (list, tuple)):
        return tuple(to_immutable(i) for i in obj)
    return obj


def to_dict(obj: Any) -> Any:
    # Map 與模型 -> dict，tuple -> list；無法序列化的值交給 json 報錯
    if isinstance(obj, BaseModel):
        obj = obj.model_dump()
    if isinstance(obj, (dict, Map)):
        return {k: to_dict(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_dict(i) for i in obj]
    return obj
