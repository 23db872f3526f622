"""
FileStatus 解码与权限 / 时间格式化的单元测试。
"""

from __future__ import annotations

import json
import re
from datetime import date, timedelta

import pytest

from hdfsapi.errors import DecodeError
from hdfsapi.models import (
    decode_dir_listing,
    decode_file_status,
    decode_single_status,
    format_modification_time,
    format_permission,
    format_replication,
)

from tests.gateway import listing_body, single_body, status_dict

_BITS = (0x400, 0x200, 0x100, 0x40, 0x20, 0x10, 0x4, 0x2, 0x1)


def test_decode_single_status_all_fields() -> None:
    """完整 GETFILESTATUS 响应解码为 FileStatus，字段一一对应。"""
    fs = decode_single_status(single_body(status_dict()))
    assert fs is not None
    assert fs.type == "FILE"
    assert fs.path_suffix == "data.csv"
    assert fs.owner == "hdfs"
    assert fs.group == "supergroup"
    assert fs.length == 1024
    assert fs.replication == 3
    assert fs.block_size == 134217728
    assert fs.file_id == 16386
    assert fs.to_json()["pathSuffix"] == "data.csv"


def test_decode_optional_fields_default_to_zero() -> None:
    """accessTime / blockSize / childrenNum / fileId / storagePolicy 缺失时为 0。"""
    raw = status_dict()
    for key in ("accessTime", "blockSize", "childrenNum", "fileId", "storagePolicy"):
        del raw[key]
    fs = decode_file_status(raw)
    assert (fs.access_time, fs.block_size, fs.children_num, fs.file_id, fs.storage_policy) == (0, 0, 0, 0, 0)


@pytest.mark.parametrize("field", ["type", "permission", "pathSuffix", "owner", "group", "length", "modificationTime", "replication"])
def test_decode_missing_required_field(field: str) -> None:
    raw = status_dict()
    del raw[field]
    with pytest.raises(DecodeError, match=field):
        decode_file_status(raw)


def test_decode_null_type_is_error() -> None:
    with pytest.raises(DecodeError):
        decode_file_status(status_dict(type=None))


@pytest.mark.parametrize(
    "overrides",
    [
        {"length": "1024"},
        {"replication": True},
        {"owner": 7},
        {"permission": "rwx"},
    ],
)
def test_decode_wrong_types(overrides: dict) -> None:
    """类型不符或 permission 不是十六进制时抛 DecodeError，而不是静默取默认值。"""
    with pytest.raises(DecodeError):
        decode_file_status(status_dict(**overrides))


def test_decode_malformed_json() -> None:
    with pytest.raises(DecodeError):
        decode_single_status("{not json")
    with pytest.raises(DecodeError):
        decode_dir_listing('{"FileStatuses": [1, 2]}')
    with pytest.raises(DecodeError):
        decode_single_status('{"Other": {}}')


@pytest.mark.parametrize("body", [None, "", "  ", "null"])
def test_empty_bodies_mean_no_entries(body: str | None) -> None:
    assert decode_single_status(body) is None
    assert decode_dir_listing(body) == []


@pytest.mark.parametrize(
    "body",
    ['{"FileStatuses": null}', '{"FileStatuses": {"FileStatus": null}}', '{"FileStatuses": {"FileStatus": []}}', "{}"],
)
def test_empty_listing_shapes(body: str) -> None:
    assert decode_dir_listing(body) == []


def test_listing_keeps_gateway_order() -> None:
    names = ["zeta", "alpha", "mid"]
    entries = decode_dir_listing(listing_body([status_dict(pathSuffix=n) for n in names]))
    assert [e.path_suffix for e in entries] == names


# ------------------------- 权限 -------------------------


def test_permission_tail_matches_bits_for_all_values() -> None:
    """0..0x1FF 的每个值：第 i 位为 - 当且仅当对应位为 0。"""
    for p in range(0x200):
        fs = decode_file_status(status_dict(permission=format(p, "x")))
        tail = format_permission(fs)[1:]
        assert len(tail) == 9
        for i, bit in enumerate(_BITS):
            assert (tail[i] == "-") == (p & bit == 0)
            if p & bit:
                assert tail[i] == "rwx"[i % 3]


@pytest.mark.parametrize(
    ("permission", "kind", "expected"),
    [
        ("755", "DIRECTORY", "drwxr-xr-x"),
        ("644", "FILE", "-rw-r--r--"),
        ("777", "directory", "drwxrwxrwx"),
        ("700", "Directory", "drwx------"),
        ("0", "FILE", "----------"),
        ("1ff", "DIRECTORY", "d--xrwxrwx"),
    ],
)
def test_format_permission(permission: str, kind: str, expected: str) -> None:
    """按十六进制解析：八进制文本 "755" 得到 rwxr-xr-x；目录标记不区分大小写。"""
    fs = decode_file_status(status_dict(permission=permission, type=kind))
    assert format_permission(fs) == expected


def test_format_permission_symlink_is_not_directory() -> None:
    fs = decode_file_status(status_dict(permission="777", type="SYMLINK"))
    assert format_permission(fs) == "-rwxrwxrwx"


# ------------------------- 时间 / 副本 -------------------------


def test_format_modification_time() -> None:
    assert format_modification_time(decode_file_status(status_dict(modificationTime=0))) == "1970-01-01 00:00"
    # 2023-11-14 22:13:20 UTC
    assert format_modification_time(decode_file_status(status_dict(modificationTime=1700000000000))) == "2023-11-14 22:13"


def test_format_replication() -> None:
    assert format_replication(decode_file_status(status_dict(replication=0))) == "-"
    assert format_replication(decode_file_status(status_dict(replication=3))) == "3"


def test_to_json_round_trips_wire_names() -> None:
    raw = status_dict()
    assert decode_file_status(json.loads(json.dumps(decode_file_status(raw).to_json()))) == decode_file_status(raw)


@pytest.mark.parametrize("permission", ["0x1ff", " 755 ", "1_ff", "", "+755", "-1"])
def test_permission_must_be_plain_hex_digits(permission: str) -> None:
    """int(..., 16) 会接受 0x 前缀、空白和下划线，网关字段只允许十六进制数字。"""
    with pytest.raises(DecodeError, match="permission"):
        decode_file_status(status_dict(permission=permission))


@pytest.mark.parametrize(
    ("ms", "expected"),
    [
        (-60000, "1969-12-31 23:59"),
        (253402300799000, "9999-12-31 23:59"),
        # 超出 datetime 范围，按公历外推
        (253402300800000, "10000-01-01 00:00"),
    ],
)
def test_format_modification_time_edges(ms: int, expected: str) -> None:
    assert format_modification_time(decode_file_status(status_dict(modificationTime=ms))) == expected


def test_format_modification_time_far_future_does_not_raise() -> None:
    text = format_modification_time(decode_file_status(status_dict(modificationTime=10**17)))
    assert re.fullmatch(r"3170843-\d{2}-\d{2} \d{2}:\d{2}", text)


def test_civil_from_days_matches_datetime() -> None:
    from hdfsapi.models import _civil_from_days

    for days in (-719162, -1, 0, 59, 365, 11016, 19675, 2932896):
        d = date(1970, 1, 1) + timedelta(days=days)
        assert _civil_from_days(days) == (d.year, d.month, d.day)
