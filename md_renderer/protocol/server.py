"""
协议服务循环

从输入流逐行读取 JSON 请求，每个请求输出一行紧凑 JSON 响应。
"""

import json
import logging
import sys
from typing import Optional, TextIO

from md_renderer.protocol.processor import RequestProcessor

logger = logging.getLogger(__name__)


def encode_response(response: dict) -> str:
    """序列化为单行 JSON"""
    return json.dumps(response, ensure_ascii=False, separators=(",", ":"))


def serve(
    processor: Optional[RequestProcessor] = None,
    input_stream: Optional[TextIO] = None,
    output_stream: Optional[TextIO] = None,
) -> int:
    """
    运行协议循环直到输入结束

    空行被忽略；无法解析的行记录警告后跳过，不产生响应。

    Args:
        processor: 请求处理器
        input_stream: 输入流，默认 stdin
        output_stream: 输出流，默认 stdout

    Returns:
        已处理的请求数
    """
    processor = processor or RequestProcessor()
    input_stream = input_stream or sys.stdin
    output_stream = output_stream or sys.stdout

    handled = 0
    for line_number, raw in enumerate(input_stream, start=1):
        line = raw.strip()
        if not line:
            continue

        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping malformed request on line {line_number}: {e}")
            continue

        response = processor.process(request)
        output_stream.write(encode_response(response) + "\n")
        output_stream.flush()
        handled += 1

    logger.info(f"Input closed after {handled} requests")
    return handled
