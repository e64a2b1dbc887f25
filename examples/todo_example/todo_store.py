from pyselectx import create_store
from todo_reducers import todos_reducer

# 創建Store並註冊Reducer
store = create_store({"todos": todos_reducer})
