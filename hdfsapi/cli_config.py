"""
CLI 本地配置：~/.config/hdfsapi/config.json 中保存 base_url、user、max_length，
与命令行覆盖合并成 HDFSSettings。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from hdfsapi.config import HDFSSettings

_KEYS = ("base_url", "user", "max_length")


def _config_dir() -> Path:
    """配置目录：~/.config/hdfsapi（所有平台统一）。"""
    return Path.home() / ".config" / "hdfsapi"


def config_path() -> Path:
    return _config_dir() / "config.json"


def load_config() -> dict[str, Any] | None:
    """读取本地配置（只保留已知键）；文件不存在、不是 JSON 对象或缺少 base_url 时返回 None。"""
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict) or "base_url" not in data:
        return None
    return {k: data[k] for k in _KEYS if k in data}


def load_settings(base_url: str | None = None, user: str | None = None) -> HDFSSettings:
    """
    保存的配置 + 命令行覆盖；都没有时使用默认值。

    :raises ValueError: 配置文件中的 max_length 不是整数
    """
    cfg = load_config() or {}
    defaults = HDFSSettings()
    max_length = cfg.get("max_length", defaults.max_length)
    if not isinstance(max_length, int) or isinstance(max_length, bool):
        raise ValueError(f"invalid max_length in {config_path()}: {max_length!r}")
    return HDFSSettings(
        base_url=base_url or cfg.get("base_url") or defaults.base_url,
        user=user if user is not None else cfg.get("user", defaults.user),
        max_length=max_length,
    )


def save_config(base_url: str, user: str | None = None, max_length: int | None = None) -> None:
    """写入配置；base_url 统一以单个 / 结尾，未给出的键不写。"""
    values = {"base_url": base_url.rstrip("/") + "/", "user": user, "max_length": max_length}
    p = config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(
        json.dumps({k: v for k, v in values.items() if v is not None}, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def clear_config() -> bool:
    """删除配置文件；原本存在时返回 True。"""
    try:
        config_path().unlink()
    except FileNotFoundError:
        return False
    return True
