"""
协议层错误定义

这些异常只在请求处理器内部抛出，最终被转换为响应中的 error 字符串。
"""


class ProtocolError(Exception):
    """协议错误基类"""
    pass


class UnknownOperationError(ProtocolError):
    """未知操作"""

    def __init__(self, operation: object = None):
        super().__init__("Unknown operation")
        self.operation = operation


class InvalidRequestError(ProtocolError):
    """请求缺少 Markdown 内容或格式不正确"""

    def __init__(self, message: str = "Markdown content required"):
        super().__init__(message)


class ContentTooLargeError(ProtocolError):
    """Markdown 内容超过长度上限"""

    def __init__(self, size: int = 0, limit: int = 0):
        super().__init__("Content too large")
        self.size = size
        self.limit = limit
