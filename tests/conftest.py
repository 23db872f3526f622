"""
pytest 配置与共享 fixture。

单元测试使用 FakeGateway（tests.gateway）；集成测试的网关地址见 tests.config。
"""

from __future__ import annotations

import pytest

from hdfsapi import HDFSClient, HDFSFileLister

from tests.config import WEBHDFS_BASE_URL, WEBHDFS_USER
from tests.gateway import ROOT_DIR, FakeGateway, single_body


@pytest.fixture
def gateway() -> FakeGateway:
    """预置了 "/" 状态（自检用）的模拟网关。"""
    return FakeGateway().on("GETFILESTATUS", "/", single_body(ROOT_DIR))


@pytest.fixture
def lister(gateway: FakeGateway) -> HDFSFileLister:
    """已完成连接自检的 lister。"""
    lst = HDFSFileLister(gateway.client())
    lst.open()
    return lst


@pytest.fixture(scope="module")
def live_lister():
    """
    真实 WebHDFS 的 lister；自检失败则跳过整个模块。
    """
    lst = HDFSFileLister(HDFSClient(WEBHDFS_BASE_URL, WEBHDFS_USER, timeout=5.0))
    lst.open()
    if lst.unreachable:
        lst.close()
        pytest.skip(f"WebHDFS 测试网关不可用 ({WEBHDFS_BASE_URL})")
    yield lst
    lst.close()
