"""WP-CLI subprocess execution and post/menu helpers."""

from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path
from typing import Any, Sequence

from .config import WP_CLI_BIN, WP_CLI_MAX_BUFFER, WP_CLI_TIMEOUT, logger
from .errors import ToolInputError, WpCliError
from .models import MenuItemAddInput, PostCreateInput, PostUpdateInput

_FLAG_NAME_RE = re.compile(r"^[a-z][a-z0-9_-]*$")
_CHUNK_SIZE = 64 * 1024


def flag(name: str, value: Any = None) -> str:
    """Build a single ``--name[=value]`` argument.

    The result is always exactly one argv element, whatever the value holds.
    """
    if not _FLAG_NAME_RE.match(name):
        raise ToolInputError(f"Invalid WP-CLI flag name: {name!r}")
    if value is None:
        return f"--{name}"
    return f"--{name}={value}"


def positional(value: Any) -> str:
    """Render a positional argument, refusing values WP-CLI would parse as flags."""
    text = str(value)
    if not text or text.startswith("-"):
        raise ToolInputError(f"Invalid WP-CLI argument: {text!r}")
    return text


class WpCli:
    """Runs WP-CLI against one WordPress installation.

    Args:
        site_root: Directory containing wp-config.php; used as the working directory.
        socket_path: MySQL socket exported as MYSQL_UNIX_PORT so WP-CLI
            reaches the same server as the MySQL tools.
        binary: WP-CLI executable.
        timeout: Seconds before the process is killed; 0 or None waits forever.
        max_output: Maximum bytes of stdout captured.
    """

    def __init__(
        self,
        site_root: Path | str | None,
        socket_path: str | None = None,
        binary: str = WP_CLI_BIN,
        timeout: float | None = WP_CLI_TIMEOUT,
        max_output: int = WP_CLI_MAX_BUFFER,
    ):
        self.site_root = Path(site_root) if site_root else None
        self.socket_path = socket_path
        self.binary = binary
        self.timeout = timeout or None
        self.max_output = max_output

    def _env(self) -> dict[str, str]:
        env = dict(os.environ)
        if self.socket_path:
            env["MYSQL_UNIX_PORT"] = self.socket_path
        return env

    async def _read_capped(self, stream: asyncio.StreamReader) -> bytes:
        chunks = []
        total = 0
        while True:
            chunk = await stream.read(_CHUNK_SIZE)
            if not chunk:
                break
            total += len(chunk)
            if total > self.max_output:
                raise WpCliError(
                    f"WP-CLI output exceeded {self.max_output} bytes."
                )
            chunks.append(chunk)
        return b"".join(chunks)

    async def _communicate(
        self, proc: asyncio.subprocess.Process, stdin: bytes | None
    ) -> tuple[bytes, bytes]:
        async def _feed() -> None:
            if proc.stdin is None:
                return
            try:
                if stdin:
                    proc.stdin.write(stdin)
                    await proc.stdin.drain()
                proc.stdin.close()
            except (BrokenPipeError, ConnectionResetError):
                # The process exited without reading all of its input
                logger.debug("WP-CLI closed stdin before reading all input")

        tasks = [
            asyncio.ensure_future(_feed()),
            asyncio.ensure_future(self._read_capped(proc.stdout)),
            asyncio.ensure_future(self._read_capped(proc.stderr)),
        ]
        try:
            _, out, err = await asyncio.gather(*tasks)
            await proc.wait()
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        return out, err

    async def run(
        self, command: str, args: Sequence[str] = (), input: str | None = None
    ) -> str:
        """Run ``wp <command> <args...>`` and return its stdout.

        A non-zero exit that still printed something returns that output;
        WP-CLI often reports partial success that way.

        Raises:
            WpCliError: If the process cannot start, times out, exceeds the
                output cap, or fails without printing anything.
        """
        if self.site_root is None:
            raise WpCliError(
                "WordPress site path not found. Start a Local site or set WP_PATH."
            )

        argv = [command, *args]
        logger.debug("Executing WP-CLI: %s %s", self.binary, " ".join(argv))

        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary,
                *argv,
                stdin=asyncio.subprocess.PIPE if input is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(self.site_root),
                env=self._env(),
            )
        except OSError as e:
            raise WpCliError(f"WP-CLI error: could not run '{self.binary}': {e}") from e

        stdin = input.encode("utf-8") if input is not None else None
        try:
            stdout, stderr = await asyncio.wait_for(
                self._communicate(proc, stdin), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            await self._kill(proc)
            raise WpCliError(f"WP-CLI timed out after {self.timeout}s.") from e
        except WpCliError:
            await self._kill(proc)
            raise

        output = stdout.decode("utf-8", errors="replace")
        if proc.returncode == 0:
            return output
        if output:
            logger.debug("WP-CLI exited with %s but produced output", proc.returncode)
            return output

        message = stderr.decode("utf-8", errors="replace").strip()
        raise WpCliError(
            f"WP-CLI error: {message or f'exited with status {proc.returncode}'}"
        )

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()

    # -----------------------------------------------------------------------
    # Posts and menus
    # -----------------------------------------------------------------------

    async def update_post_content(self, post_id: int | str, content: str) -> str:
        """Replace a post's content, passed on stdin rather than as a flag."""
        return await self.run("post", ["update", positional(post_id), "-"], input=content)

    async def create_post(self, options: PostCreateInput) -> str:
        """Create a post and return its ID.

        Content is written by a second invocation so large block markup never
        shares a command line with the other fields.
        """
        args = [
            "create",
            flag("post_type", options.post_type or "post"),
            flag("post_title", options.post_title),
            flag("post_status", options.post_status or "publish"),
            flag("porcelain"),
        ]
        if options.post_name:
            args.append(flag("post_name", options.post_name))
        if options.post_parent:
            args.append(flag("post_parent", options.post_parent))

        post_id = (await self.run("post", args)).strip()
        if not post_id.isdigit():
            raise WpCliError(f"WP-CLI did not return a post ID: {post_id}")

        if options.post_content:
            await self.update_post_content(post_id, options.post_content)

        return post_id

    async def update_post(self, options: PostUpdateInput) -> None:
        """Update whichever fields are set; does nothing if none are."""
        args = ["update", positional(options.post_id)]
        if options.post_title:
            args.append(flag("post_title", options.post_title))
        if options.post_status:
            args.append(flag("post_status", options.post_status))
        if options.post_name:
            args.append(flag("post_name", options.post_name))

        if len(args) > 2:
            await self.run("post", args)

        if options.post_content:
            await self.update_post_content(options.post_id, options.post_content)

    async def delete_post(self, post_id: int, force: bool = False) -> str:
        args = ["delete", positional(post_id)]
        if force:
            args.append(flag("force"))
        return await self.run("post", args)

    async def add_menu_item(self, options: MenuItemAddInput) -> str:
        args = [
            "item",
            "add-post",
            positional(options.menu),
            positional(options.post_id),
        ]
        if options.title:
            args.append(flag("title", options.title))
        if options.parent_id:
            args.append(flag("parent-id", options.parent_id))
        return await self.run("menu", args)
