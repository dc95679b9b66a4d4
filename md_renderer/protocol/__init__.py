"""
Protocol Layer - 协议层

行分隔 JSON 请求/响应协议：请求处理器、结果缓存和服务循环。
"""

from md_renderer.protocol.errors import (
    ProtocolError,
    UnknownOperationError,
    InvalidRequestError,
    ContentTooLargeError,
)
from md_renderer.protocol.cache import ResultCache, make_cache_key
from md_renderer.protocol.processor import RequestProcessor, parse_options
from md_renderer.protocol.server import serve, encode_response

__all__ = [
    "ProtocolError",
    "UnknownOperationError",
    "InvalidRequestError",
    "ContentTooLargeError",
    "ResultCache",
    "make_cache_key",
    "RequestProcessor",
    "parse_options",
    "serve",
    "encode_response",
]
