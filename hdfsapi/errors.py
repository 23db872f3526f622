"""
hdfsapi 异常定义。

- GatewayRequestError: 单次请求失败（网络错误或非 2xx）
- DecodeError: 响应体无法解析为期望的 FileStatus 结构
- ConnectivityError: 初始化自检失败后锁定的「无法连接」状态
"""

from __future__ import annotations

from typing import Any


class HDFSApiError(Exception):
    """hdfsapi 所有异常的基类。"""


class GatewayRequestError(HDFSApiError):
    """对网关的单次请求失败（传输层错误或 HTTP 非 2xx）。"""

    def __init__(
        self,
        path: str,
        cause: BaseException,
        *,
        status_code: int | None = None,
        remote: dict[str, Any] | None = None,
    ):
        self.path = path
        self.cause = cause
        self.status_code = status_code
        # WebHDFS 出错时返回 {"RemoteException": {"exception": ..., "message": ...}}
        self.remote = remote
        super().__init__(self._describe())

    def _describe(self) -> str:
        msg = f"request for {self.path} failed"
        if self.status_code is not None:
            msg += f" ({self.status_code})"
        if self.remote:
            return f"{msg}: {self.remote.get('exception', 'RemoteException')}: {self.remote.get('message', '')}"
        return f"{msg}: {self.cause}"


class DecodeError(HDFSApiError):
    """响应体格式错误、缺少必填字段或字段类型不符。"""


class ConnectivityError(HDFSApiError):
    """初始化时连接自检失败；此后所有列表/目录判断都直接返回默认值。"""

    def __init__(self, base_url: str, cause: BaseException | None = None):
        self.base_url = base_url
        self.cause = cause
        msg = f"cannot connect to WebHDFS at {base_url}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
