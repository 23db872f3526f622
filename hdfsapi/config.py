"""
宿主传入的属性配置：hdfs.url / hdfs.user / hdfs.maxlength。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from hdfsapi.client import DEFAULT_URL, DEFAULT_USER, HDFSClient
from hdfsapi.listing import DEFAULT_MAX_LENGTH, HDFSFileLister

HDFS_URL = "hdfs.url"
HDFS_USER = "hdfs.user"
HDFS_MAXLENGTH = "hdfs.maxlength"

# 属性名 -> (默认值, 说明)
PROPERTIES: dict[str, tuple[str, str]] = {
    HDFS_URL: (DEFAULT_URL, "The URL for WebHDFS"),
    HDFS_USER: (DEFAULT_USER, "The WebHDFS user"),
    HDFS_MAXLENGTH: (str(DEFAULT_MAX_LENGTH), "Maximum number of lines of results fetched"),
}


@dataclass(frozen=True)
class HDFSSettings:
    base_url: str = DEFAULT_URL
    user: str = DEFAULT_USER
    max_length: int = DEFAULT_MAX_LENGTH

    @classmethod
    def from_properties(cls, props: Mapping[str, str]) -> HDFSSettings:
        """从属性表读取；未提供的键取默认值。hdfs.maxlength 不是整数时抛 ValueError。"""
        raw_max = props.get(HDFS_MAXLENGTH) or str(DEFAULT_MAX_LENGTH)
        try:
            max_length = int(raw_max)
        except ValueError:
            raise ValueError(f"{HDFS_MAXLENGTH} must be an integer, got {raw_max!r}") from None
        return cls(
            base_url=props.get(HDFS_URL) or DEFAULT_URL,
            user=props.get(HDFS_USER, DEFAULT_USER),
            max_length=max_length,
        )


def create_lister(settings: HDFSSettings, *, long_format: bool = False, timeout: float = 30.0) -> HDFSFileLister:
    """按配置创建 HDFSFileLister（未执行连接自检，需调用 open()）。"""
    client = HDFSClient(settings.base_url, settings.user, timeout=timeout)
    return HDFSFileLister(client, long_format=long_format, max_lines=settings.max_length)
