"""
PySelectX：參數化、記憶化的狀態選擇器。

以 combine_selectors、select_argument、select_root 三個函式
組合出所有選擇器，並附帶一個最小的響應式 Store。
"""
from .errors import (
    PySelectXError, SelectorError, ArgumentsEncodingError, ConfigurationError,
    ActionError, ReducerError, StoreError, ErrorHandler, global_error_handler, handle_error
)
from .equality import reference_equal, shallow_equal, deep_equal, check_equal
from .argument_cache import ArgumentCache, encode_arguments
from .selectors import (
    SelectorOptions, MemoizedSelector, ParameterizedSelector,
    apply_input_selectors, combine_selectors, select_argument, select_root
)
from .actions import Action, create_action, init_store
from .reducers import create_reducer, on, combine_reducers
from .store import Store, create_store
from .immutable_utils import to_immutable, to_dict
from .types import CacheInfo, ParameterizedSelectorLike, StateSelector

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "PySelectXError", "SelectorError", "ArgumentsEncodingError", "ConfigurationError",
    "ActionError", "ReducerError", "StoreError", "ErrorHandler", "global_error_handler", "handle_error",

    # Equality
    "reference_equal", "shallow_equal", "deep_equal", "check_equal",

    # Selectors
    "SelectorOptions", "MemoizedSelector", "ParameterizedSelector", "ArgumentCache",
    "encode_arguments", "apply_input_selectors", "combine_selectors",
    "select_argument", "select_root", "CacheInfo",
    "ParameterizedSelectorLike", "StateSelector",

    # Store
    "Action", "create_action", "init_store",
    "create_reducer", "on", "combine_reducers",
    "Store", "create_store",

    # Immutable Utils
    "to_immutable", "to_dict",
]
