"""
结果缓存模块 - 带过期时间的协议结果缓存

缓存键为操作名、Markdown 内容和选项的 md5。
"""

import hashlib
import json
import threading
import time
from collections import OrderedDict
from typing import Any, Optional


def make_cache_key(operation: str, markdown: str, options: Optional[dict] = None) -> str:
    """计算 `operation:markdown:options` 的 md5，选项按键排序序列化"""
    options_str = json.dumps(options, sort_keys=True) if options else ""
    content = f"{operation}:{markdown}:{options_str}"
    return hashlib.md5(content.encode("utf-8")).hexdigest()


class ResultCache:
    """
    线程安全的 TTL 缓存

    条目超过 max_entries 时按插入顺序淘汰最旧的条目；max_entries <= 0 时不缓存。
    """

    def __init__(self, ttl: float = 300.0, max_entries: int = 256):
        self.ttl = ttl
        self.max_entries = max_entries
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """返回未过期的缓存值，过期条目顺便删除"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expiry, value = entry
            if expiry <= time.monotonic():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        if self.max_entries <= 0:
            return
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (time.monotonic() + self.ttl, value)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
