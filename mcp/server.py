#!/usr/bin/env python3
"""MCP server exposing ai-dev-config operations as structured tools."""

from __future__ import annotations

import argparse
import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any

SCRIPT_DIR = Path(__file__).resolve().parent.parent / "scripts"
sys.path.insert(0, str(SCRIPT_DIR))

import ai_dev_config as adc  # noqa: E402
from mcp.server.fastmcp import FastMCP  # noqa: E402

mcp = FastMCP(
    "ai-dev-config",
    instructions="Install shared Claude Code, Gemini CLI, OpenCode, and Codex configs into a project and log sessions.",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _mock_args(**kwargs: Any) -> argparse.Namespace:
    defaults = {
        "dry_run": False,
        "verbose": False,
        "project_root": None,
        "tool": None,
        "no_backup": False,
        "log_to_git": False,
        "remove_codex": False,
        "remove_sessions": False,
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


@contextmanager
def _capture_output():
    old_out, old_err = sys.stdout, sys.stderr
    sys.stdout = buf_out = io.StringIO()
    sys.stderr = buf_err = io.StringIO()
    try:
        yield buf_out, buf_err
    finally:
        sys.stdout, sys.stderr = old_out, old_err


def _run_cmd(fn, args: argparse.Namespace) -> dict[str, Any]:
    with _capture_output() as (out, err):
        try:
            fn(args)
        except SystemExit as e:
            return {
                "success": False,
                "error": err.getvalue().strip() or out.getvalue().strip() or f"exit code {e.code}",
            }
        except OSError as e:
            return {"success": False, "error": str(e)}
    return {
        "success": True,
        "output": out.getvalue().strip(),
    }


# ---------------------------------------------------------------------------
# Read-only tools
# ---------------------------------------------------------------------------


@mcp.tool()
def config_status(project_root: str | None = None) -> dict[str, Any]:
    """Return the install state of every managed tool as structured JSON.

    Args:
        project_root: Project to inspect. Defaults to the repo containing this checkout.
    """
    ctx = adc.resolve_context(_mock_args(project_root=project_root))
    directory = adc.sessions_dir(ctx)
    return {
        "install_root": str(ctx.install_root),
        "project_root": str(ctx.project_root),
        "global_config": str(ctx.global_config),
        "tools": [
            {
                "name": tool.name,
                "label": tool.label,
                "kind": tool.kind,
                "target": str(ctx.target_path(tool)),
                "state": adc.observe_state(ctx, tool),
                "installed": adc.is_installed(ctx, tool),
            }
            for tool in adc.TOOLS.values()
        ],
        "sessions_dir": str(directory),
        "session_count": len(adc.list_sessions(directory)),
    }


@mcp.tool()
def session_list(project_root: str | None = None, limit: int = 20) -> dict[str, Any]:
    """List the most recent session log files, newest last.

    Args:
        project_root: Project whose sessions to list.
        limit: Maximum number of entries to return.
    """
    ctx = adc.resolve_context(_mock_args(project_root=project_root))
    sessions = adc.list_sessions(adc.sessions_dir(ctx))
    return {"sessions": [p.name for p in sessions[-limit:]] if limit > 0 else []}


# ---------------------------------------------------------------------------
# Install tools
# ---------------------------------------------------------------------------


@mcp.tool()
def config_install(
    tool: str | None = None,
    no_backup: bool = False,
    log_to_git: bool = False,
    project_root: str | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Link tool configs into the project, backing up anything in the way.

    Args:
        tool: Restrict to one tool (claude-code, gemini-cli, opencode, codex).
        no_backup: Delete existing configs instead of renaming them to .backup.<timestamp>.
        log_to_git: Track session logs in git instead of ignoring them.
        project_root: Project to configure.
        dry_run: Preview changes without writing files.
    """
    args = _mock_args(tool=tool, no_backup=no_backup, log_to_git=log_to_git,
                      project_root=project_root, dry_run=dry_run)
    return _run_cmd(adc.cmd_install, args)


@mcp.tool()
def config_uninstall(
    tool: str | None = None,
    remove_codex: bool = False,
    remove_sessions: bool = False,
    project_root: str | None = None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Remove our symlinks from the project. Foreign links and real files are left alone.

    Args:
        tool: Restrict to one tool.
        remove_codex: Also delete the global Codex config.
        remove_sessions: Also delete session logs and their .gitignore entry.
        project_root: Project to clean up.
        dry_run: Preview without removing.
    """
    args = _mock_args(tool=tool, remove_codex=remove_codex, remove_sessions=remove_sessions,
                      project_root=project_root, dry_run=dry_run)
    return _run_cmd(adc.cmd_uninstall, args)


# ---------------------------------------------------------------------------
# Session tools
# ---------------------------------------------------------------------------


@mcp.tool()
def session_log(
    tool: str,
    prompt: str = "",
    plan: str = "",
    files_changed: list[str] | None = None,
    outcome: str = "",
    slug: str = "",
    session_id: str = "",
    project_root: str | None = None,
) -> dict[str, Any]:
    """Write a markdown summary of an assistant session.

    Args:
        tool: Tool that ran the session (e.g. "claude-code").
        prompt: The user's request.
        plan: The plan that was followed.
        files_changed: Paths touched during the session.
        outcome: What happened.
        slug: Filename slug. Derived from the prompt if empty.
        session_id: Tool-specific session identifier.
        project_root: Project whose session directory receives the file.
    """
    args = _mock_args(
        tool=tool,
        prompt=prompt,
        plan=plan,
        files_changed=files_changed or [],
        outcome=outcome,
        slug=slug,
        session_id=session_id,
        from_hook=False,
        project_root=project_root,
    )
    return _run_cmd(adc.cmd_log_session, args)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    mcp.run(transport="stdio")
