"""
目录列表格式化。

HDFSFileLister 持有一个 HDFSClient，对外只提供 open（连接自检）、list_all、is_directory
等少数操作。列表与目录判断都是「尽力而为」：请求或解码失败只记日志，返回空结果 / False。

连接自检只做一次：open() 时查询 "/" 的状态，失败则锁定为 UNREACHABLE，
之后所有列表与目录判断直接返回默认值，不再发起网络请求。
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from hdfsapi.client import HDFSClient
from hdfsapi.errors import ConnectivityError, DecodeError, GatewayRequestError
from hdfsapi.models import (
    FileStatus,
    decode_dir_listing,
    decode_single_status,
    format_modification_time,
    format_permission,
    format_replication,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 1000


class ConnectionState(enum.Enum):
    UNVERIFIED = "unverified"
    CONNECTED = "connected"
    UNREACHABLE = "unreachable"


@dataclass
class ListingResult:
    """list_entries 的结果：lines 为已截断的行，total 为网关返回的条目数。"""

    lines: list[str] = field(default_factory=list)
    total: int = 0
    truncated: bool = False

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)


def full_path(parent: str, suffix: str) -> str:
    """父路径与 pathSuffix 拼接；父路径恰为 "/" 时不再插入斜杠。"""
    return parent + suffix if len(parent) == 1 else f"{parent}/{suffix}"


def format_line(parent: str, status: FileStatus, *, long_format: bool, target: str | None = None) -> str:
    """单个条目的一行输出（短格式只有名称）；target 覆盖长格式最后一列的完整路径。"""
    if not long_format:
        return status.path_suffix
    return "\t ".join(
        [
            format_permission(status),
            format_replication(status),
            status.owner,
            status.group,
            str(status.length),
            format_modification_time(status) + " GMT",
            target if target is not None else full_path(parent, status.path_suffix),
        ]
    )


class HDFSFileLister:
    """
    WebHDFS 目录浏览。

    :param client: 网关客户端（按引用持有，close() 时一并关闭）
    :param long_format: 默认是否使用 ls -l 风格的长格式
    :param max_lines: 单次列表最多输出的行数；None 或 <= 0 表示不限制
    """

    def __init__(
        self,
        client: HDFSClient,
        *,
        long_format: bool = False,
        max_lines: int | None = DEFAULT_MAX_LENGTH,
    ):
        self.client = client
        self.long_format = long_format
        self.max_lines = max_lines
        self._state = ConnectionState.UNVERIFIED
        self._connect_error: BaseException | None = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def unreachable(self) -> bool:
        return self._state is ConnectionState.UNREACHABLE

    # ------------------------- 生命周期 -------------------------

    def open(self) -> ConnectionState:
        """连接自检：查询 "/" 的状态。只在 UNVERIFIED 时执行一次。"""
        if self._state is not ConnectionState.UNVERIFIED:
            return self._state
        try:
            self._fetch_status("/")
        except (GatewayRequestError, DecodeError) as e:
            logger.error("Cannot open WebHDFS connection. Bad URL: %s", self.client.base_url, exc_info=e)
            self._connect_error = e
            self._state = ConnectionState.UNREACHABLE
        else:
            logger.info("Successfully created WebHDFS connection to %s", self.client.base_url)
            self._state = ConnectionState.CONNECTED
        return self._state

    def check_connection(self) -> None:
        """自检失败时抛出 ConnectivityError（供 CLI 等外层报告错误）。"""
        if self.unreachable:
            raise ConnectivityError(self.client.base_url, self._connect_error)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> HDFSFileLister:
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------- 查询 -------------------------

    def _fetch_status(self, path: str) -> FileStatus | None:
        return decode_single_status(self.client.get_file_status(path))

    def stat(self, path: str) -> FileStatus | None:
        """单个路径的状态；不可达或失败时返回 None。"""
        if self.unreachable:
            return None
        try:
            return self._fetch_status(path)
        except (GatewayRequestError, DecodeError, ValueError) as e:
            logger.error("stat: %s", path, exc_info=e)
            return None

    def is_directory(self, path: str) -> bool:
        """type 恰为 "DIRECTORY"（区分大小写）时返回 True；任何失败均返回 False。"""
        status = self.stat(path)
        return status is not None and status.type == "DIRECTORY"

    def list_entries(self, path: str, *, long_format: bool | None = None) -> ListingResult:
        """列出目录下的条目，按网关返回的顺序，超过 max_lines 的部分被截断。"""
        result = ListingResult()
        if self.unreachable:
            return result
        long_format = self.long_format if long_format is None else long_format
        try:
            entries = decode_dir_listing(self.client.list_status(path))
        except (GatewayRequestError, DecodeError, ValueError) as e:
            logger.error("listall: listDir %s", path, exc_info=e)
            return result
        result.total = len(entries)
        limit = self.max_lines if self.max_lines and self.max_lines > 0 else None
        if limit is not None and len(entries) > limit:
            logger.warning("listing of %s truncated to %d of %d entries", path, limit, len(entries))
            entries = entries[:limit]
            result.truncated = True
        # 某个条目无法格式化时保留已生成的行
        for fs in entries:
            try:
                result.lines.append(format_line(path, fs, long_format=long_format))
            except (ValueError, OverflowError) as e:
                logger.error("listall: format %s/%s", path, fs.path_suffix, exc_info=e)
                break
        return result

    def list_all(self, path: str, *, long_format: bool | None = None) -> str:
        """目录列表文本，每个条目一行（以换行结尾）；失败时为空字符串。"""
        return self.list_entries(path, long_format=long_format).text

    def list_file(self, path: str, *, long_format: bool | None = None) -> str | None:
        """
        目录则列出其内容；文件则输出该文件自身的一行（完整路径即 path）。

        :return: 列表文本；路径不存在、请求失败或网关不可达时返回 None
        """
        status = self.stat(path)
        if status is None:
            return None
        if status.type == "DIRECTORY":
            return self.list_all(path, long_format=long_format)
        long_format = self.long_format if long_format is None else long_format
        if not long_format:
            return (status.path_suffix or path.rstrip("/").rsplit("/", 1)[-1]) + "\n"
        # 单个状态的 pathSuffix 为空，最后一列直接使用查询路径
        return format_line(path, status, long_format=True, target=path) + "\n"
