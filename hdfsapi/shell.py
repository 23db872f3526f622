"""
简易文件 shell：在当前目录上执行 pwd / cd / ls [-l] / help。
"""

from __future__ import annotations

import posixpath
import shlex
from dataclasses import dataclass

from hdfsapi.listing import HDFSFileLister

HELP_TEXT = """\
pwd               print the current directory
cd [DIR]          change the current directory (default: /)
ls [-l] [PATH]    list a directory or show a file (-l: long format)
help              show this help
"""


@dataclass(frozen=True)
class ShellResult:
    ok: bool
    text: str


class FileShell:
    """维护当前目录并把命令行翻译为 HDFSFileLister 调用。"""

    def __init__(self, lister: HDFSFileLister, cwd: str = "/"):
        self.lister = lister
        self.cwd = cwd

    def resolve(self, path: str | None) -> str:
        """相对路径基于当前目录解析，并规范化 . / .. / 多余斜杠。"""
        if not path:
            return self.cwd
        joined = path if path.startswith("/") else posixpath.join(self.cwd, path)
        norm = posixpath.normpath(joined)
        # normpath 保留开头的 "//"
        return "/" + norm.lstrip("/")

    def execute(self, line: str) -> ShellResult:
        try:
            words = shlex.split(line)
        except ValueError as e:
            return ShellResult(False, f"parse error: {e}")
        if not words:
            return ShellResult(True, "")
        cmd, args = words[0], words[1:]
        if cmd == "pwd":
            return ShellResult(True, self.cwd)
        if cmd == "cd":
            return self._cd(args)
        if cmd == "ls":
            return self._ls(args)
        if cmd == "help":
            return ShellResult(True, HELP_TEXT)
        return ShellResult(False, f"Unknown command: {cmd}")

    def _cd(self, args: list[str]) -> ShellResult:
        target = self.resolve(args[0]) if args else "/"
        if not self.lister.is_directory(target):
            return ShellResult(False, f"{target}: No such directory")
        self.cwd = target
        return ShellResult(True, "")

    def _ls(self, args: list[str]) -> ShellResult:
        flags = [a for a in args if a.startswith("-") and len(a) > 1]
        paths = [a for a in args if a not in flags]
        long_format = any("l" in f[1:] for f in flags)
        target = self.resolve(paths[0] if paths else None)
        text = self.lister.list_file(target, long_format=long_format)
        if text is None:
            return ShellResult(False, f"{target}: No such file or directory")
        return ShellResult(True, text)
