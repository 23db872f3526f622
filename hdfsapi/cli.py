"""
hdfsapi CLI：网关地址与用户保存到本地一次，之后各命令直接使用；也可用 --base-url / --user 临时覆盖。
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Optional

import typer

from hdfsapi.cli_config import clear_config, load_config, load_settings, save_config
from hdfsapi.config import HDFSSettings, create_lister
from hdfsapi.errors import ConnectivityError
from hdfsapi.listing import HDFSFileLister
from hdfsapi.shell import FileShell

app = typer.Typer(
    name="hdfs",
    help="WebHDFS browsing CLI. Save the gateway once; use it for all commands.",
)

_base_url_option: type = Annotated[
    Optional[str],
    typer.Option("--base-url", "-b", help="Override saved WebHDFS URL"),
]
_user_option: type = Annotated[
    Optional[str],
    typer.Option("--user", "-u", help="Override saved WebHDFS user"),
]


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log requests and failures to stderr")] = False,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _settings(base_url: str | None, user: str | None) -> HDFSSettings:
    try:
        return load_settings(base_url, user)
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)


def _get_lister(base_url: str | None, user: str | None, *, long_format: bool = False) -> HDFSFileLister:
    return create_lister(_settings(base_url, user), long_format=long_format)


def _open_or_exit(lister: HDFSFileLister) -> None:
    lister.open()
    try:
        lister.check_connection()
    except ConnectivityError as e:
        lister.close()
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)


# ------------------------- login / logout / info -------------------------


@app.command("login", help="Save WebHDFS URL and user to local config")
def login(
    base_url: Annotated[Optional[str], typer.Option("--base-url", "-b", help="WebHDFS URL")] = None,
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="WebHDFS user")] = None,
    max_length: Annotated[Optional[int], typer.Option("--max-length", "-m", help="Maximum listing lines")] = None,
) -> None:
    defaults = HDFSSettings()
    base_url = base_url or input(f"WebHDFS URL [{defaults.base_url}]: ").strip() or defaults.base_url
    if user is None:
        user = input(f"User [{defaults.user}]: ").strip() or defaults.user
    save_config(base_url, user, max_length)
    typer.echo("Saved.")


@app.command("logout", help="Clear saved config")
def logout() -> None:
    if clear_config():
        typer.echo("Cleared.")
    else:
        typer.echo("No saved config.")


@app.command("info", help="Show the effective URL, user and max lines")
def info_cmd() -> None:
    cfg = load_config()
    if not cfg:
        typer.echo("No saved config; using defaults.")
    settings = _settings(None, None)
    typer.echo(f"base_url: {settings.base_url}")
    typer.echo(f"user: {settings.user}")
    typer.echo(f"max_length: {settings.max_length}")


# ------------------------- test -------------------------


@app.command("test", help="Check the connection to the gateway")
def test_cmd(base_url: _base_url_option = None, user: _user_option = None) -> None:
    lister = _get_lister(base_url, user)
    _open_or_exit(lister)
    lister.close()
    typer.echo("Connected.")


# ------------------------- ls / list -------------------------


def _cmd_list_impl(path: str, long_format: bool, base_url: str | None, user: str | None) -> None:
    path = "/" + path.strip().strip("/") if path.strip() else "/"
    lister = _get_lister(base_url, user, long_format=long_format)
    _open_or_exit(lister)
    try:
        if lister.is_directory(path):
            result = lister.list_entries(path)
            text = result.text
            if result.truncated:
                typer.echo(f"warning: showing {len(result.lines)} of {result.total} entries", err=True)
        else:
            text = lister.list_file(path)
    finally:
        lister.close()
    if text is None:
        typer.echo(f"error: {path}: No such file or directory", err=True)
        raise typer.Exit(1)
    typer.echo(text, nl=False)


@app.command("ls", help="List a directory (or show one file)")
def ls_cmd(
    path: Annotated[str, typer.Argument(help="Remote path (default: /)")] = "/",
    long_format: Annotated[bool, typer.Option("--long", "-l", help="Long format (permissions, owner, size, time)")] = False,
    base_url: _base_url_option = None,
    user: _user_option = None,
) -> None:
    _cmd_list_impl(path, long_format, base_url, user)


@app.command("list", help="Alias for ls")
def list_cmd(
    path: Annotated[str, typer.Argument(help="Remote path (default: /)")] = "/",
    long_format: Annotated[bool, typer.Option("--long", "-l", help="Long format (permissions, owner, size, time)")] = False,
    base_url: _base_url_option = None,
    user: _user_option = None,
) -> None:
    _cmd_list_impl(path, long_format, base_url, user)


# ------------------------- stat -------------------------


@app.command("stat", help="Print the file status of a path (JSON)")
def stat_cmd(
    path: Annotated[str, typer.Argument(help="Remote path")],
    base_url: _base_url_option = None,
    user: _user_option = None,
) -> None:
    path = "/" + path.strip().strip("/")
    lister = _get_lister(base_url, user)
    _open_or_exit(lister)
    try:
        status = lister.stat(path)
    finally:
        lister.close()
    if status is None:
        typer.echo(f"error: {path}: No such file or directory", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(status.to_json(), ensure_ascii=False, indent=2))


# ------------------------- shell -------------------------


@app.command("shell", help="Interactive pwd / cd / ls shell")
def shell_cmd(base_url: _base_url_option = None, user: _user_option = None) -> None:
    lister = _get_lister(base_url, user)
    _open_or_exit(lister)
    sh = FileShell(lister)
    try:
        while True:
            try:
                line = input(f"hdfs:{sh.cwd}> ")
            except EOFError:
                typer.echo()
                break
            if line.strip() in ("exit", "quit"):
                break
            result = sh.execute(line)
            if result.text:
                typer.echo(result.text, nl=not result.text.endswith("\n"), err=not result.ok)
    finally:
        lister.close()


# ------------------------- main -------------------------


def main() -> None:
    app()


if __name__ == "__main__":
    main()
