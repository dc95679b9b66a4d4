"""
请求处理器 - 行分隔 JSON 协议的操作分发

请求格式：{"operation": <name>, "data": {...}}
响应格式：{"success": bool, "result" | "error": ..., "executionTime": 微秒}

支持的操作：
1. render_markdown: 渲染 HTML，返回 html/length/lines
2. validate_markdown: 不做实际校验，始终返回有效
3. extract_metadata: 提取标题、链接、图片、代码块
4. render_with_toc: 渲染 HTML 并生成目录
"""

import copy
import logging
import time
from typing import Any, Callable, Optional

from md_renderer.config import RendererConfig
from md_renderer.core.extractor import extract_metadata
from md_renderer.core.renderer import MarkdownRenderer, RenderOptions
from md_renderer.core.toc import generate_toc
from md_renderer.protocol.cache import ResultCache, make_cache_key
from md_renderer.protocol.errors import (
    ContentTooLargeError,
    InvalidRequestError,
    ProtocolError,
    UnknownOperationError,
)

logger = logging.getLogger(__name__)


def parse_options(raw: Any) -> RenderOptions:
    """
    解析请求中的渲染选项

    非对象类型的 options 被忽略。

    Args:
        raw: data.options 原始值

    Returns:
        RenderOptions
    """
    if not isinstance(raw, dict):
        return RenderOptions()
    return RenderOptions(
        sanitize=bool(raw.get("sanitize", False)),
        heading_ids=bool(raw.get("headingIds", False)),
    )


class RequestProcessor:
    """请求处理器"""

    def __init__(
        self,
        renderer: Optional[MarkdownRenderer] = None,
        config: Optional[RendererConfig] = None,
        cache: Optional[ResultCache] = None,
    ):
        """
        初始化处理器

        Args:
            renderer: 渲染器实例，默认新建
            config: 运行配置，默认使用内置默认值
            cache: 结果缓存；为 None 且配置启用缓存时自动创建
        """
        self.config = config or RendererConfig()
        self.renderer = renderer or MarkdownRenderer()
        if cache is None and self.config.cache_enabled:
            cache = ResultCache(self.config.cache_ttl, self.config.cache_max_entries)
        self.cache = cache

        self._handlers: dict[str, Callable[[dict], dict]] = {
            "render_markdown": self.render_markdown,
            "validate_markdown": self.validate_markdown,
            "extract_metadata": self.extract_metadata,
            "render_with_toc": self.render_with_toc,
        }

    @property
    def operations(self) -> list[str]:
        return list(self._handlers)

    def process(self, request: Any) -> dict:
        """
        处理单个请求

        任何错误都以 success=false 的响应返回，不会抛出异常。

        Args:
            request: 已解析的 JSON 请求

        Returns:
            响应字典
        """
        start = time.perf_counter()
        response: dict[str, Any]

        try:
            result = self._dispatch(request)
            response = {"success": True, "result": result}
        except ProtocolError as e:
            logger.info(f"Request rejected: {e}")
            response = {"success": False, "error": str(e)}
        except Exception as e:
            logger.error(f"Operation failed: {e}", exc_info=True)
            response = {"success": False, "error": str(e)}

        response["executionTime"] = int((time.perf_counter() - start) * 1_000_000)
        return response

    def _dispatch(self, request: Any) -> dict:
        operation = request.get("operation") if isinstance(request, dict) else None
        handler = self._handlers.get(operation) if isinstance(operation, str) else None
        if handler is None:
            raise UnknownOperationError(operation)

        data = request.get("data")
        if not isinstance(data, dict):
            raise InvalidRequestError()

        logger.debug(f"Handling operation {operation}")
        return handler(data)

    def _markdown(self, data: dict) -> str:
        markdown = data.get("markdown")
        if not isinstance(markdown, str):
            raise InvalidRequestError()
        if len(markdown) > self.config.max_input_chars:
            raise ContentTooLargeError(len(markdown), self.config.max_input_chars)
        return markdown

    def _cached(self, operation: str, markdown: str, options: Optional[dict], compute: Callable[[], dict]) -> dict:
        if self.cache is None:
            return compute()

        key = make_cache_key(operation, markdown, options)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {operation}")
            return copy.deepcopy(cached)

        result = compute()
        self.cache.set(key, copy.deepcopy(result))
        return result

    def render_markdown(self, data: dict) -> dict:
        markdown = self._markdown(data)
        options = parse_options(data.get("options"))

        def compute() -> dict:
            html = self.renderer.render(markdown, options)
            return {
                "html": html,
                "length": len(html.encode("utf-8")),
                "lines": markdown.count("\n") + 1,
            }

        return self._cached("render", markdown, _options_key(options), compute)

    def validate_markdown(self, data: dict) -> dict:
        # 不做实际校验
        self._markdown(data)
        return {"valid": True, "errors": [], "warnings": []}

    def extract_metadata(self, data: dict) -> dict:
        markdown = self._markdown(data)

        def compute() -> dict:
            return {"metadata": extract_metadata(markdown).to_dict()}

        return self._cached("metadata", markdown, None, compute)

    def render_with_toc(self, data: dict) -> dict:
        markdown = self._markdown(data)
        options = parse_options(data.get("options"))

        def compute() -> dict:
            metadata = extract_metadata(markdown)
            return {
                "html": self.renderer.render(markdown, options),
                "toc": generate_toc(metadata.headings),
                "metadata": metadata.to_dict(),
            }

        return self._cached("toc", markdown, _options_key(options), compute)


def _options_key(options: RenderOptions) -> dict:
    return {"sanitize": options.sanitize, "headingIds": options.heading_ids}
