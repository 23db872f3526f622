"""
WebHDFS 网关命令客户端。

把「操作名 + 路径 + 可选参数」翻译为一次 HTTP GET：
    <base_url><path>?op=<OPERATION>&user.name=<user>[&其他参数]
成功（2xx）时返回响应体文本；失败时抛出 GatewayRequestError。不做重试。
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Mapping
from urllib.parse import quote

import httpx

from hdfsapi.errors import GatewayRequestError

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:50070/webhdfs/v1/"
DEFAULT_USER = "hdfs"


class Operation(str, enum.Enum):
    """支持的 WebHDFS 操作（只读元数据查询）。"""

    GETFILESTATUS = "GETFILESTATUS"
    LISTSTATUS = "LISTSTATUS"


def _path_for_url(path: str) -> str:
    """将路径按段做 UTF-8 百分号编码，供 URL 使用（中文等非 ASCII 文件名）。"""
    segments = (path.strip("/").split("/") if path.strip("/") else [])
    return "/" + "/".join(quote(seg, safe="") for seg in segments) if segments else "/"


def _remote_exception(response: httpx.Response) -> dict[str, Any] | None:
    """解析 WebHDFS 错误响应中的 RemoteException；不是该格式时返回 None。"""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("RemoteException"), dict):
        return data["RemoteException"]
    return None


class HDFSClient:
    """
    WebHDFS 网关客户端。

    认证方式：仅通过 user.name 查询参数声明用户（无 Kerberos / 委托令牌）。
    示例： base_url="http://localhost:50070/webhdfs/v1/", user="hdfs"
    """

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        user: str = DEFAULT_USER,
        *,
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        :param base_url: WebHDFS 根地址，如 http://localhost:50070/webhdfs/v1/（末尾 / 可有可无）
        :param user: 网关用户名，作为 user.name 参数发送，可为空字符串
        :param timeout: 请求超时秒数
        :param verify: 是否验证 HTTPS 证书
        :param transport: 自定义 httpx 传输层（测试时传入 httpx.MockTransport）
        """
        if not base_url:
            raise ValueError("base_url must not be empty")
        self.base_url = base_url.rstrip("/")
        self.user = user if user is not None else ""
        self.timeout = timeout
        self.verify = verify
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=self.timeout,
                verify=self.verify,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """关闭底层 HTTP 客户端。"""
        if self._client and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> HDFSClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def command_url(self, path: str) -> str:
        """返回某路径对应的请求地址（不含查询参数）。"""
        if not path.startswith("/"):
            raise ValueError(f"path must start with '/': {path!r}")
        return self.base_url + _path_for_url(path)

    # ------------------------- 命令 -------------------------

    def run_command(
        self,
        op: Operation | str,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """
        执行一次 WebHDFS 命令并返回响应体文本。

        :param op: 操作名，如 Operation.LISTSTATUS
        :param path: 远程绝对路径，必须以 / 开头
        :param params: 附加查询参数
        :return: 响应体文本（2xx）
        :raises GatewayRequestError: 网络错误或 HTTP 非 2xx
        """
        url = self.command_url(path)
        query: dict[str, Any] = {"op": Operation(op).value, "user.name": self.user}
        if params:
            query.update(params)
        logger.debug("GET %s op=%s", url, query["op"])
        try:
            r = self._get_client().get(url, params=query)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GatewayRequestError(
                path,
                e,
                status_code=e.response.status_code,
                remote=_remote_exception(e.response),
            ) from e
        except httpx.HTTPError as e:
            raise GatewayRequestError(path, e) from e
        return r.text

    def get_file_status(self, path: str) -> str:
        """GETFILESTATUS：单个路径的状态（SingleStatus JSON）。"""
        return self.run_command(Operation.GETFILESTATUS, path)

    def list_status(self, path: str) -> str:
        """LISTSTATUS：目录下所有子项的状态（DirListing JSON）。"""
        return self.run_command(Operation.LISTSTATUS, path)
