"""
Shell command adapter: run a command and report its exit status.

Used for the quiet ``--version`` probes as well as for the install and
dev commands, which stream straight to the user's terminal.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from chico.adapters.base import Adapter, ExecutionContext
from chico.core.models.action import Receipt

logger = logging.getLogger(__name__)

OUTPUT_MODES = ("silent", "capture", "inherit")


class ShellCommandAdapter(Adapter):
    """Execute commands in an explicit working directory.

    Action params:
        argv (list[str]): Program and arguments, run without a shell.
        command (str): Literal command string, run through the shell.
            Exactly one of ``argv`` / ``command`` is required.
        output (str): 'silent' discards stdout/stderr, 'inherit' passes
            them through to the terminal, 'capture' (default) collects
            them into the receipt.
        timeout (int | None): Timeout in seconds (default: 300, None = wait forever).
    """

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        argv = context.action.params.get("argv")
        command = context.action.params.get("command", "")
        if not argv and not command:
            return False, "Missing required param: 'argv' or 'command'"
        if argv and command:
            return False, "Params 'argv' and 'command' are mutually exclusive"

        output = context.action.params.get("output", "capture")
        if output not in OUTPUT_MODES:
            return False, f"Unknown output mode '{output}'. Valid: {', '.join(OUTPUT_MODES)}"

        if not Path(context.working_dir).is_dir():
            return False, f"Working directory does not exist: {context.working_dir}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        argv: list[str] | None = params.get("argv")
        command: str = params.get("command", "")
        output = params.get("output", "capture")
        timeout = params.get("timeout", 300)
        cwd = context.working_dir

        display = " ".join(argv) if argv else command
        logger.debug("Executing: %s (cwd=%s, output=%s)", display, cwd, output)

        if argv:
            # Resolve through PATH/PATHEXT so npm.cmd & co. work on Windows
            executable = shutil.which(argv[0])
            if executable is None:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Executable not found: {argv[0]}",
                    metadata={"command": display},
                )
            argv = [executable, *argv[1:]]

        if output == "silent":
            streams = {
                "stdin": subprocess.DEVNULL,
                "stdout": subprocess.DEVNULL,
                "stderr": subprocess.DEVNULL,
            }
        elif output == "capture":
            streams = {"capture_output": True, "text": True}
        else:
            streams = {}

        start = time.monotonic()
        try:
            result = subprocess.run(
                argv if argv else command,
                shell=not argv,
                cwd=cwd,
                timeout=timeout,
                **streams,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command timed out after {timeout}s",
                metadata={"command": display, "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                metadata={"command": display},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = (result.stdout or "").strip() if output == "capture" else ""
        stderr = (result.stderr or "").strip() if output == "capture" else ""

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=context.action.id,
                output=stdout,
                return_code=0,
                duration_ms=elapsed_ms,
                metadata={"command": display, "stderr": stderr},
            )
        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error=stderr or f"Command exited with code {result.returncode}",
            return_code=result.returncode,
            duration_ms=elapsed_ms,
            metadata={"command": display, "stdout": stdout},
        )
