"""
PySelectX 錯誤處理模組。

定義函式庫的異常層級，並提供集中式錯誤處理器，
負責將結構化錯誤輸出到主控台或日誌檔。
"""
import datetime
import functools
import json
import sys
import traceback
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

T = TypeVar("T")


class PySelectXError(Exception):
    """所有 PySelectX 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.traceback = "".join(traceback.format_stack()[:-1])

    def to_dict(self) -> Dict[str, Any]:
        """將錯誤轉為可序列化的字典，供報告與日誌使用。"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "traceback": self.traceback,
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class SelectorError(PySelectXError):
    """與 Selector 相關的錯誤。"""

    def __init__(self, message: str, selector_name: Optional[str] = None, **kwargs: Any) -> None:
        details = {"selector_name": selector_name}
        details.update(kwargs)
        super().__init__(message, details)


class ArgumentsEncodingError(SelectorError):
    """選擇器參數無法正規化編碼為快取鍵。"""

    def __init__(self, message: str, selector_name: Optional[str] = None, arguments: Any = None, **kwargs: Any) -> None:
        super().__init__(message, selector_name, arguments=repr(arguments), **kwargs)


class ConfigurationError(PySelectXError):
    """配置相關的錯誤。"""

    def __init__(self, message: str, component: str, config_key: Optional[str] = None, **kwargs: Any) -> None:
        details = {"component": component, "config_key": config_key}
        details.update(kwargs)
        super().__init__(message, details)


class ActionError(PySelectXError):
    """與 Action 相關的錯誤。"""

    def __init__(self, message: str, action_type: str, payload: Any = None, **kwargs: Any) -> None:
        details = {"action_type": action_type, "payload": repr(payload)}
        details.update(kwargs)
        super().__init__(message, details)


class ReducerError(PySelectXError):
    """與 Reducer 相關的錯誤。"""

    def __init__(self, message: str, reducer_name: str, action_type: str, **kwargs: Any) -> None:
        details = {"reducer_name": reducer_name, "action_type": action_type}
        details.update(kwargs)
        super().__init__(message, details)


class StoreError(PySelectXError):
    """與 Store 相關的錯誤。"""

    def __init__(self, message: str, operation: str, **kwargs: Any) -> None:
        details = {"operation": operation}
        details.update(kwargs)
        super().__init__(message, details)


class ErrorHandler:
    """集中式錯誤處理器，用於捕獲、日誌記錄和錯誤報告。"""

    def __init__(self, log_to_console: bool = True, log_to_file: bool = False, log_file: Optional[str] = None) -> None:
        if log_to_file and not log_file:
            raise ConfigurationError("啟用檔案日誌時必須指定 log_file", component="ErrorHandler", config_key="log_file")
        self.log_to_console = log_to_console
        self.log_to_file = log_to_file
        self.log_file = log_file
        self.handlers: List[Callable[[PySelectXError], None]] = []

    def register_handler(self, handler: Callable[[PySelectXError], None]) -> None:
        """註冊自訂錯誤回調，每個被處理的結構化錯誤都會傳給它。"""
        self.handlers.append(handler)

    def unregister_handler(self, handler: Callable[[PySelectXError], None]) -> None:
        if handler in self.handlers:
            self.handlers.remove(handler)

    def handle(self, error: Union[PySelectXError, Exception]) -> None:
        """
        處理一個錯誤：輸出日誌並通知所有已註冊的回調。

        非 PySelectXError 的異常會被包裝為 PySelectXError 再處理。

        Args:
            error: 要處理的錯誤
        """
        if not isinstance(error, PySelectXError):
            error = PySelectXError(str(error), {"original_type": error.__class__.__name__})

        timestamp = datetime.datetime.now().isoformat(timespec="seconds")
        line = f"[{timestamp}] ❌ {error.__class__.__name__}: {error}"

        if self.log_to_console:
            print(line, file=sys.stderr)

        if self.log_to_file and self.log_file:
            record = error.to_dict()
            record["timestamp"] = timestamp
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(record, ensure_ascii=False, default=repr) + "\n")

        for handler in list(self.handlers):
            handler(error)


# 單例錯誤處理器
global_error_handler = ErrorHandler()


def handle_error(func: Callable[..., T]) -> Callable[..., T]:
    """
    裝飾器：將函式拋出的 PySelectXError 交給全局錯誤處理器記錄後再重新拋出。
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except PySelectXError as err:
            global_error_handler.handle(err)
            raise
    return wrapper
