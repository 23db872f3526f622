"""
WebHDFS 数据模型与解码（字段名与网关 JSON 一致）。

- SingleStatus:  {"FileStatus": OneFileStatus}
- DirListing:    {"FileStatuses": {"FileStatus": [OneFileStatus, ...]}}

permission 字段：网关给出的是八进制模式的文本（如 "755"），这里按十六进制解析，
每个八进制位恰好落在一个十六进制半字节上，再按位测试得到 rwxrwxrwx。
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from hdfsapi.errors import DecodeError

# 权限位（十六进制解析后）与对应字符，顺序即输出顺序
_PERMISSION_BITS = (
    (0x400, "r"), (0x200, "w"), (0x100, "x"),
    (0x40, "r"), (0x20, "w"), (0x10, "x"),
    (0x4, "r"), (0x2, "w"), (0x1, "x"),
)

_HEX_MODE = re.compile(r"[0-9a-fA-F]+")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# 网关 JSON 字段 -> (属性名, 类型, 是否必填)
# accessTime 等字段在旧版网关上不返回，缺失时取 0
_FIELDS: dict[str, tuple[str, type, bool]] = {
    "accessTime": ("access_time", int, False),
    "blockSize": ("block_size", int, False),
    "childrenNum": ("children_num", int, False),
    "fileId": ("file_id", int, False),
    "group": ("group", str, True),
    "length": ("length", int, True),
    "modificationTime": ("modification_time", int, True),
    "owner": ("owner", str, True),
    "pathSuffix": ("path_suffix", str, True),
    "permission": ("permission", str, True),
    "replication": ("replication", int, True),
    "storagePolicy": ("storage_policy", int, False),
    "type": ("type", str, True),
}


@dataclass(frozen=True)
class FileStatus:
    """单个路径的状态（OneFileStatus）。时间为毫秒时间戳。"""

    type: str
    permission: str
    path_suffix: str
    owner: str
    group: str
    length: int
    modification_time: int
    replication: int
    access_time: int = 0
    block_size: int = 0
    children_num: int = 0
    file_id: int = 0
    storage_policy: int = 0

    @property
    def is_dir(self) -> bool:
        """权限列使用的目录判断（不区分大小写）。"""
        return self.type.lower() == "directory"

    @property
    def mode(self) -> int:
        """permission 按十六进制解析后的整数。"""
        return int(self.permission, 16)

    def to_json(self) -> dict[str, Any]:
        """还原为网关字段名的 dict（用于 CLI 输出）。"""
        return {wire: getattr(self, attr) for wire, (attr, _, _) in _FIELDS.items()}


def decode_file_status(obj: Any) -> FileStatus:
    """
    按字段表校验并构造 FileStatus。

    :raises DecodeError: 非对象、缺少必填字段、类型不符或 permission 不是十六进制
    """
    if not isinstance(obj, dict):
        raise DecodeError(f"FileStatus must be an object, got {type(obj).__name__}")
    values: dict[str, Any] = {}
    for wire, (attr, kind, required) in _FIELDS.items():
        value = obj.get(wire)
        if value is None:
            if required:
                raise DecodeError(f"FileStatus missing required field {wire!r}")
            continue
        # bool 是 int 的子类，需单独排除
        if not isinstance(value, kind) or isinstance(value, bool):
            raise DecodeError(f"FileStatus field {wire!r} must be {kind.__name__}, got {value!r}")
        values[attr] = value
    # int(..., 16) 还接受 "0x"、空白和下划线，这里只允许纯十六进制数字
    if not _HEX_MODE.fullmatch(values["permission"]):
        raise DecodeError(f"FileStatus permission is not a hex mode: {values['permission']!r}")
    return FileStatus(**values)


def _load(text: str | None) -> Any:
    if text is None or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError as e:
        raise DecodeError(f"malformed JSON body: {e}") from e


def decode_single_status(text: str | None) -> FileStatus | None:
    """解码 GETFILESTATUS 响应；空 / null 响应体返回 None。"""
    data = _load(text)
    if data is None:
        return None
    if not isinstance(data, dict) or "FileStatus" not in data:
        raise DecodeError("expected an object with a 'FileStatus' member")
    return decode_file_status(data["FileStatus"])


def decode_dir_listing(text: str | None) -> list[FileStatus]:
    """解码 LISTSTATUS 响应，保持网关返回的顺序；空 / null 视为无条目。"""
    data = _load(text)
    if data is None:
        return []
    if not isinstance(data, dict):
        raise DecodeError("expected an object with a 'FileStatuses' member")
    statuses = data.get("FileStatuses")
    if statuses is None:
        return []
    if not isinstance(statuses, dict):
        raise DecodeError("'FileStatuses' must be an object")
    entries = statuses.get("FileStatus")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise DecodeError("'FileStatuses.FileStatus' must be an array")
    return [decode_file_status(e) for e in entries]


# ------------------------- 展示 -------------------------


def format_permission(status: FileStatus) -> str:
    """10 位权限串，如 drwxr-xr-x。"""
    p = status.mode
    head = "d" if status.is_dir else "-"
    return head + "".join(ch if p & bit else "-" for bit, ch in _PERMISSION_BITS)


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """1970-01-01 起的天数 -> (年, 月, 日)，公历外推，对任意整数成立。"""
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    return yoe + era * 400 + (1 if month <= 2 else 0), month, day


def format_modification_time(status: FileStatus) -> str:
    """
    修改时间格式化为 yyyy-MM-dd HH:mm（UTC）。

    超出 datetime 范围（公元 1–9999 年以外）的时间戳按公历外推计算，不抛异常。
    """
    ms = status.modification_time
    try:
        ts = _EPOCH + timedelta(milliseconds=ms)
        year, month, day, minutes = ts.year, ts.month, ts.day, ts.hour * 60 + ts.minute
    except OverflowError:
        days, minutes = divmod(ms // 60000, 24 * 60)
        year, month, day = _civil_from_days(days)
    return f"{year:04d}-{month:02d}-{day:02d} {minutes // 60:02d}:{minutes % 60:02d}"


def format_replication(status: FileStatus) -> str:
    """副本数；0 表示不适用（目录），显示为 -。"""
    return "-" if status.replication == 0 else str(status.replication)
