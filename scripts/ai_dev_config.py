#!/usr/bin/env python3
"""Link shared AI assistant configs into a project and record assistant sessions."""

from __future__ import annotations

import argparse
import json
import os
import re
import shutil
import stat
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, TextIO

# ---------------------------------------------------------------------------
# Terminal colors (respects NO_COLOR and non-TTY)
# ---------------------------------------------------------------------------

_USE_COLOR = (
    sys.stdout.isatty()
    and os.environ.get("NO_COLOR") is None
    and os.environ.get("TERM") != "dumb"
)


def _ansi(code: str) -> str:
    return f"\033[{code}m" if _USE_COLOR else ""


class C:
    """ANSI escape sequences, empty strings when color is disabled."""
    RESET = _ansi("0")
    BOLD = _ansi("1")
    DIM = _ansi("2")
    RED = _ansi("31")
    GREEN = _ansi("32")
    YELLOW = _ansi("33")
    BLUE = _ansi("34")
    MAGENTA = _ansi("35")
    BOLD_RED = _ansi("1;31")
    BOLD_GREEN = _ansi("1;32")
    BOLD_YELLOW = _ansi("1;33")
    BOLD_CYAN = _ansi("1;36")


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

INSTALL_ROOT = Path(
    os.environ.get("AI_DEV_CONFIG_ROOT") or Path(__file__).resolve().parent.parent
)

REFERENCE_MARKER = ".codex-config-ref"
SESSIONS_DIRNAME = ".ai-sessions"
GITIGNORE_COMMENT = "# ai-dev-config session logs"

BACKUP_TS_FORMAT = "%Y%m%d_%H%M%S"
SESSION_TS_FORMAT = "%Y-%m-%d_%H-%M-%S"
MERGE_MARKER_TEMPLATE = "\n# Merged from ai-dev-config ({timestamp})\n"

KIND_SYMLINK = "symlink"
KIND_MERGE = "merge-file"

STATE_ABSENT = "absent"
STATE_OURS = "ours"
STATE_FOREIGN = "foreign"
STATE_REGULAR = "regular"

ACTIONS = ("install", "uninstall")

SLUG_MAX = 50
NOT_RECORDED = "_None recorded._"

SESSION_TEMPLATE = """\
# Session: {title}

- **Tool:** {tool}
- **Date:** {date}
- **Session ID:** {session_id}

## Prompt

{prompt}

## Plan

{plan}

## Files Changed

{files_changed}

## Outcome

{outcome}
"""


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    label: str
    source: str
    target: str
    kind: str = KIND_SYMLINK


TOOLS: dict[str, ToolDefinition] = {
    "claude-code": ToolDefinition("claude-code", "Claude Code", "claude-code", ".claude"),
    "gemini-cli": ToolDefinition("gemini-cli", "Gemini CLI", "gemini-cli", ".gemini"),
    "opencode": ToolDefinition("opencode", "OpenCode", "opencode/opencode.json", "opencode.json"),
    "codex": ToolDefinition("codex", "Codex", "codex/config.toml", "config.toml", KIND_MERGE),
}


@dataclass
class InstallContext:
    """Where configs come from, where they go, and the shared global Codex file."""
    install_root: Path
    project_root: Path
    global_config: Path

    def source_path(self, tool: ToolDefinition) -> Path:
        return self.install_root / tool.source

    def target_path(self, tool: ToolDefinition) -> Path:
        if tool.kind == KIND_MERGE:
            return self.global_config
        return self.project_root / tool.target

    def link_text(self, tool: ToolDefinition) -> str:
        """Symlink contents: the source relative to the link's directory."""
        target = self.target_path(tool)
        return os.path.relpath(self.source_path(tool), target.parent)


@dataclass
class SessionRecord:
    tool: str
    prompt: str = ""
    plan: str = ""
    files_changed: list[str] = field(default_factory=list)
    outcome: str = ""
    session_id: str = ""
    slug: str = ""


# ---------------------------------------------------------------------------
# CLI setup
# ---------------------------------------------------------------------------


class CliParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on bad usage."""

    def error(self, message: str) -> None:
        print_error(message)
        self.print_usage(sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = CliParser(
        prog="ai_dev_config.py",
        description="Install shared AI coding-assistant configs into a project.",
    )
    parser.add_argument("--dry-run", action="store_true", help="Preview changes without writing")
    parser.add_argument("--verbose", action="store_true", help="Detailed output")
    parser.add_argument("--project-root", metavar="PATH",
                        help="Project to configure (default: nearest git repo above this checkout)")

    tool_names = ", ".join(TOOLS)
    sub = parser.add_subparsers(dest="command")

    inst = sub.add_parser("install", help="Link tool configs into the project")
    inst.add_argument("--no-backup", action="store_true",
                      help="Delete existing configs instead of backing them up")
    inst.add_argument("--tool", metavar="NAME", help=f"Install a single tool ({tool_names})")
    inst.add_argument("--log-to-git", action="store_true",
                      help="Commit session logs instead of ignoring them")

    uninst = sub.add_parser("uninstall", help="Remove tool configs from the project")
    uninst.add_argument("--remove-codex", action="store_true",
                        help="Also remove the global Codex config")
    uninst.add_argument("--remove-sessions", action="store_true",
                        help="Also delete session logs and their .gitignore entry")
    uninst.add_argument("--tool", metavar="NAME", help=f"Uninstall a single tool ({tool_names})")

    sub.add_parser("status", help="Show what is installed")

    log_p = sub.add_parser("log-session", help="Write a session summary (called by tool hooks)")
    log_p.add_argument("--tool", metavar="NAME", required=True, help="Tool that ran the session")
    log_p.add_argument("--slug", default="", help="Filename slug (default: from prompt)")
    log_p.add_argument("--prompt", default="", help="User prompt")
    log_p.add_argument("--plan", default="", help="Plan that was followed")
    log_p.add_argument("--files-changed", nargs="*", default=[], metavar="FILE",
                       help="Files touched during the session")
    log_p.add_argument("--outcome", default="", help="Result of the session")
    log_p.add_argument("--session-id", default="", help="Tool-specific session identifier")
    log_p.add_argument("--from-hook", action="store_true",
                       help="Read the hook JSON payload from stdin")

    return parser


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def section_header(title: str) -> None:
    width = 50
    rule = "─" * max(1, width - len(title) - 5)
    print(f"\n{C.BOLD_CYAN}─── {title} {rule}{C.RESET}")


def log(msg: str) -> None:
    print(f"  {msg}")


def log_verbose(msg: str, args: argparse.Namespace) -> None:
    if args.verbose:
        print(f"  {C.DIM}[verbose] {msg}{C.RESET}")


def log_dry_run(msg: str) -> None:
    print(f"  {C.MAGENTA}[dry-run]{C.RESET} {msg}")


def print_info(msg: str) -> None:
    print(f"{C.BLUE}[INFO]{C.RESET} {msg}")


def print_success(msg: str) -> None:
    print(f"{C.GREEN}[SUCCESS]{C.RESET} {msg}")


def print_warning(msg: str) -> None:
    print(f"{C.BOLD_YELLOW}[WARNING]{C.RESET} {msg}")


def print_error(msg: str) -> None:
    print(f"{C.BOLD_RED}[ERROR]{C.RESET} {msg}", file=sys.stderr)


def now() -> datetime:
    return datetime.now()


def timestamp(fmt: str) -> str:
    return now().strftime(fmt)


def backup_path(path: Path) -> Path:
    """Next free `<path>.backup.<timestamp>` sibling, suffixed `.1`, `.2`... on collision."""
    base = path.with_name(f"{path.name}.backup.{timestamp(BACKUP_TS_FORMAT)}")
    candidate = base
    n = 1
    while candidate.exists() or candidate.is_symlink():
        candidate = base.with_name(f"{base.name}.{n}")
        n += 1
    return candidate


def write_file(path: Path, content: str, args: argparse.Namespace) -> None:
    if args.dry_run:
        log_dry_run(f"Would write {path} ({len(content)} bytes)")
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    log_verbose(f"{C.GREEN}Wrote{C.RESET} {path}", args)


def append_file(path: Path, content: str, args: argparse.Namespace) -> None:
    if args.dry_run:
        log_dry_run(f"Would append {len(content)} bytes to {path}")
        return
    with path.open("a") as fh:
        fh.write(content)
    log_verbose(f"{C.GREEN}Appended{C.RESET} {len(content)} bytes to {path}", args)


def copy_file(src: Path, dest: Path, args: argparse.Namespace) -> None:
    if args.dry_run:
        log_dry_run(f"Would copy {src} -> {dest}")
        return
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)
    log_verbose(f"{C.BLUE}Copied{C.RESET} {src} -> {dest}", args)


def move_path(src: Path, dest: Path, args: argparse.Namespace) -> None:
    if args.dry_run:
        log_dry_run(f"Would move {src} -> {dest}")
        return
    src.rename(dest)
    log_verbose(f"{C.BLUE}Moved{C.RESET} {src} -> {dest}", args)


def remove_path(path: Path, args: argparse.Namespace) -> None:
    """Remove a file, symlink, or directory tree. Symlinks are never followed."""
    if args.dry_run:
        log_dry_run(f"Would remove {path}")
        return
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)
    log_verbose(f"{C.YELLOW}Removed{C.RESET} {path}", args)


# ---------------------------------------------------------------------------
# Project resolution
# ---------------------------------------------------------------------------


def find_project_root(install_root: Path) -> Path:
    """Nearest ancestor with a .git directory, else the install root's parent.

    A submodule checkout has a .git *file*, so the search walks past it to the
    host repository.
    """
    for directory in (install_root, *install_root.parents):
        if (directory / ".git").is_dir():
            return directory
    return install_root.parent


def codex_home() -> Path:
    env = os.environ.get("CODEX_HOME")
    return Path(env).expanduser() if env else Path.home() / ".codex"


def resolve_context(args: argparse.Namespace) -> InstallContext:
    install_root = Path(INSTALL_ROOT).expanduser().resolve()
    if getattr(args, "project_root", None):
        project_root = Path(args.project_root).expanduser().resolve()
    else:
        project_root = find_project_root(install_root)
    return InstallContext(
        install_root=install_root,
        project_root=project_root,
        global_config=codex_home() / TOOLS["codex"].target,
    )


def script_path(ctx: InstallContext) -> str:
    """This script inside the checkout, relative to the project root."""
    return os.path.relpath(ctx.install_root / "scripts" / "ai_dev_config.py", ctx.project_root)


def select_tools(name: Optional[str]) -> list[ToolDefinition]:
    if not name:
        return list(TOOLS.values())
    if name not in TOOLS:
        print_error(f"Unknown tool: {name}")
        print_error(f"Valid options: {', '.join(TOOLS)}")
        sys.exit(1)
    return [TOOLS[name]]


def verify_install_root(ctx: InstallContext, tools: list[ToolDefinition]) -> None:
    missing = [t.source for t in tools if not ctx.source_path(t).exists()]
    if missing:
        print_error(
            f"Cannot find ai-dev-config structure in {ctx.install_root} "
            f"(missing: {', '.join(missing)}). Are you running from the correct location?"
        )
        sys.exit(1)


# ---------------------------------------------------------------------------
# Install state
# ---------------------------------------------------------------------------


def link_is_ours(link: Path, ctx: InstallContext, tool: ToolDefinition) -> bool:
    """Substring match of the link's contents or resolved path against our source.

    This is a heuristic: any link whose text mentions `<checkout>/<source>`
    (e.g. `.ai-dev-config/claude-code`) is treated as ours.
    """
    expected = f"{ctx.install_root.name}/{tool.source}"
    if expected in os.readlink(link):
        return True
    try:
        resolved = link.resolve()
    except (OSError, RuntimeError):
        return False
    return expected in str(resolved)


def observe_state(ctx: InstallContext, tool: ToolDefinition) -> str:
    target = ctx.target_path(tool)
    if target.is_symlink():
        if tool.kind == KIND_SYMLINK and link_is_ours(target, ctx, tool):
            return STATE_OURS
        return STATE_FOREIGN
    if target.exists():
        return STATE_REGULAR
    return STATE_ABSENT


def is_installed(ctx: InstallContext, tool: ToolDefinition) -> bool:
    if tool.kind == KIND_MERGE:
        return ctx.global_config.is_file()
    return observe_state(ctx, tool) == STATE_OURS


def describe_target(ctx: InstallContext, tool: ToolDefinition) -> str:
    if tool.kind == KIND_MERGE:
        return str(ctx.global_config)
    suffix = "/" if ctx.source_path(tool).is_dir() else ""
    return f"{tool.target}{suffix}"


# ---------------------------------------------------------------------------
# Reconciler
# ---------------------------------------------------------------------------


def make_hooks_executable(source: Path, args: argparse.Namespace) -> None:
    hooks_dir = source / "hooks"
    if not hooks_dir.is_dir():
        return
    for script in sorted(hooks_dir.glob("*.sh")):
        if args.dry_run:
            log_dry_run(f"Would chmod +x {script}")
            continue
        try:
            mode = script.stat().st_mode
            script.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            print_warning(f"Could not make {script} executable: {e}")
            continue
        log_verbose(f"chmod +x {script}", args)


def install_symlink(ctx: InstallContext, tool: ToolDefinition,
                    args: argparse.Namespace) -> str:
    target = ctx.target_path(tool)
    link_text = ctx.link_text(tool)
    print_info(f"Installing {tool.label} configuration...")

    if target.is_symlink():
        log_verbose(f"Replacing symlink {target} -> {os.readlink(target)}", args)
        remove_path(target, args)
    elif target.exists():
        if args.no_backup:
            print_warning(f"Removing existing {target} (--no-backup specified)")
            remove_path(target, args)
        else:
            dest = backup_path(target)
            print_warning(f"Backing up existing {target} to {dest}")
            move_path(target, dest, args)

    if args.dry_run:
        log_dry_run(f"Would symlink {target} -> {link_text}")
    else:
        target.symlink_to(link_text)
        print_success(f"Created symlink: {target} -> {link_text}")

    make_hooks_executable(ctx.source_path(tool), args)
    return "linked"


def install_merge(ctx: InstallContext, tool: ToolDefinition,
                  args: argparse.Namespace) -> str:
    source = ctx.source_path(tool)
    target = ctx.global_config
    print_info(f"Installing {tool.label} configuration...")

    if target.is_file():
        print_warning(f"Existing {tool.label} config found at {target}")
        print_warning("Merging configurations...")
        if not args.no_backup:
            copy_file(target, backup_path(target), args)
        marker = MERGE_MARKER_TEMPLATE.format(timestamp=timestamp("%Y-%m-%d %H:%M:%S"))
        append_file(target, marker + source.read_text(), args)
        if not args.dry_run:
            print_success(f"Merged {tool.label} configuration")
        outcome = "merged"
    else:
        copy_file(source, target, args)
        if not args.dry_run:
            print_success(f"Created {tool.label} configuration at {target}")
        outcome = "created"

    write_reference_marker(ctx, args)
    return outcome


def write_reference_marker(ctx: InstallContext, args: argparse.Namespace) -> None:
    marker = ctx.project_root / REFERENCE_MARKER
    content = (
        f"# Codex configuration is stored at: {ctx.global_config}\n"
        "# This file is a reference marker for the ai-dev-config installation\n"
    )
    write_file(marker, content, args)
    if not args.dry_run:
        print_info(f"Created local Codex reference at {marker}")


def uninstall_symlink(ctx: InstallContext, tool: ToolDefinition,
                      args: argparse.Namespace) -> str:
    target = ctx.target_path(tool)
    print_info(f"Uninstalling {tool.label} configuration...")

    state = observe_state(ctx, tool)
    if state == STATE_OURS:
        remove_path(target, args)
        if not args.dry_run:
            print_success(f"Removed symlink: {target}")
        return "removed"
    if state == STATE_FOREIGN:
        print_warning(f"Symlink {target} points to {os.readlink(target)}, not our config. Skipping.")
        return "skipped"
    if state == STATE_REGULAR:
        print_warning(f"{target} exists but is not a symlink. Skipping.")
        return "skipped"
    print_info(f"{target} does not exist. Nothing to remove.")
    return "absent"


def uninstall_merge(ctx: InstallContext, tool: ToolDefinition,
                    args: argparse.Namespace) -> str:
    print_info(f"Uninstalling {tool.label} configuration...")
    outcome = "absent"

    marker = ctx.project_root / REFERENCE_MARKER
    if marker.is_file():
        remove_path(marker, args)
        if not args.dry_run:
            print_success(f"Removed local {tool.label} reference")
        outcome = "removed"

    if args.remove_codex:
        if ctx.global_config.is_file():
            print_warning(f"Removing global {tool.label} config: {ctx.global_config}")
            remove_path(ctx.global_config, args)
            if not args.dry_run:
                print_success(f"Removed global {tool.label} configuration")
            outcome = "removed"
    else:
        print_info(f"Global {tool.label} config at {ctx.global_config} was not removed.")
        print_info("Use --remove-codex to remove it.")
    return outcome


INSTALLERS: dict[str, Any] = {
    KIND_SYMLINK: install_symlink,
    KIND_MERGE: install_merge,
}

UNINSTALLERS: dict[str, Any] = {
    KIND_SYMLINK: uninstall_symlink,
    KIND_MERGE: uninstall_merge,
}


def reconcile(action: str, ctx: InstallContext, tools: list[ToolDefinition],
              args: argparse.Namespace) -> dict[str, str]:
    """Bring each tool's target to the installed or uninstalled state.

    Every per-tool step is idempotent, so re-running after an interruption
    converges on the same result. Returns tool name -> outcome.
    """
    if action not in ACTIONS:
        raise ValueError(f"unknown action {action!r}, expected one of {ACTIONS}")
    handlers = INSTALLERS if action == "install" else UNINSTALLERS
    results: dict[str, str] = {}
    for tool in tools:
        results[tool.name] = handlers[tool.kind](ctx, tool, args)
    return results


# ---------------------------------------------------------------------------
# Session directory and .gitignore
# ---------------------------------------------------------------------------


def sessions_dir(ctx: InstallContext) -> Path:
    env = os.environ.get("AI_SESSIONS_DIR")
    return Path(env).expanduser() if env else ctx.project_root / SESSIONS_DIRNAME


def list_sessions(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(directory.glob("*.md"))


def _project_relative(ctx: InstallContext, path: Path) -> Optional[Path]:
    """`path` relative to the project root, or None if it lies outside."""
    try:
        rel = path.resolve().relative_to(ctx.project_root)
    except ValueError:
        return None
    return rel if rel.parts else None


def _gitignore_entry(ctx: InstallContext) -> Optional[str]:
    rel = _project_relative(ctx, sessions_dir(ctx))
    if rel is None:
        return None
    return f"{rel.as_posix()}/"


def update_gitignore(ctx: InstallContext, include: bool,
                     args: argparse.Namespace) -> bool:
    """Add or drop the session directory entry. Returns True if the file changed."""
    entry = _gitignore_entry(ctx)
    if entry is None:
        return False
    gitignore = ctx.project_root / ".gitignore"
    lines = gitignore.read_text().splitlines() if gitignore.exists() else []
    if (entry in lines) == include:
        return False

    if include:
        if lines and lines[-1].strip():
            lines.append("")
        lines += [GITIGNORE_COMMENT, entry]
    else:
        lines = [line for line in lines if line not in (entry, GITIGNORE_COMMENT)]
        while lines and not lines[-1].strip():
            lines.pop()
    write_file(gitignore, "\n".join(lines) + "\n" if lines else "", args)
    return True


def prepare_sessions(ctx: InstallContext, args: argparse.Namespace) -> None:
    directory = sessions_dir(ctx)
    if args.dry_run:
        log_dry_run(f"Would create session directory {directory}")
    else:
        directory.mkdir(parents=True, exist_ok=True)

    if args.log_to_git:
        if update_gitignore(ctx, include=False, args=args):
            print_info(f"Session logs in {directory} will be tracked by git")
    elif update_gitignore(ctx, include=True, args=args):
        print_info(f"Added {_gitignore_entry(ctx)} to .gitignore")


def remove_sessions(ctx: InstallContext, args: argparse.Namespace) -> bool:
    """Delete the project's session logs. Returns True if they were removed.

    A session directory outside the project root may be shared with other
    projects and is never deleted.
    """
    directory = sessions_dir(ctx)
    if not args.remove_sessions:
        if directory.exists():
            print_info(f"Session logs in {directory} were kept. Use --remove-sessions to delete them.")
        return False
    if _project_relative(ctx, directory) is None:
        print_warning(f"Session logs in {directory} are outside {ctx.project_root}. Skipping.")
        return False
    if directory.exists():
        print_warning(f"Removing session logs: {directory}")
        remove_path(directory, args)
    if update_gitignore(ctx, include=False, args=args):
        print_info("Removed session log entry from .gitignore")
    return True


# ---------------------------------------------------------------------------
# Session recorder
# ---------------------------------------------------------------------------


def slugify(text: str) -> str:
    words = text.lower().split()[:8]
    slug = re.sub(r"[^a-z0-9]+", "-", " ".join(words)).strip("-")
    return slug[:SLUG_MAX].rstrip("-")


def session_filename(record: SessionRecord, moment: datetime) -> str:
    slug = slugify(record.slug) or slugify(record.prompt) or "session"
    return f"{moment.strftime(SESSION_TS_FORMAT)}_{slug}.md"


def render_session(record: SessionRecord, moment: datetime) -> str:
    title = record.prompt.strip().splitlines()[0][:80] if record.prompt.strip() else record.tool
    files = "\n".join(f"- `{f}`" for f in record.files_changed)
    return SESSION_TEMPLATE.format(
        title=title,
        tool=record.tool,
        date=moment.strftime("%Y-%m-%d %H:%M:%S"),
        session_id=record.session_id or "n/a",
        prompt=record.prompt.strip() or NOT_RECORDED,
        plan=record.plan.strip() or NOT_RECORDED,
        files_changed=files or NOT_RECORDED,
        outcome=record.outcome.strip() or NOT_RECORDED,
    )


def log_session(record: SessionRecord, directory: Path,
                args: argparse.Namespace) -> Path:
    """Write one session file. An existing file with the same name is replaced."""
    moment = now()
    path = directory / session_filename(record, moment)
    if args.dry_run:
        log_dry_run(f"Would write session log {path}")
        return path
    directory.mkdir(parents=True, exist_ok=True)
    path.write_text(render_session(record, moment))
    print_success(f"Logged {record.tool} session to {path}")
    return path


def read_hook_payload(stream: TextIO) -> dict[str, Any]:
    # ValueError covers both JSONDecodeError and UnicodeDecodeError from read().
    try:
        raw = stream.read()
        if not raw.strip():
            return {}
        data = json.loads(raw)
    except ValueError as e:
        print_warning(f"Ignoring malformed hook payload: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def record_from_args(args: argparse.Namespace,
                     payload: Optional[dict[str, Any]] = None) -> SessionRecord:
    """Command-line values win; the hook payload fills in what was left empty."""
    payload = payload or {}
    outcome = args.outcome or payload.get("prompt_response") or payload.get("last_assistant_message") or ""
    return SessionRecord(
        tool=args.tool,
        prompt=args.prompt or str(payload.get("prompt", "")),
        plan=args.plan,
        files_changed=list(args.files_changed or []),
        outcome=str(outcome),
        session_id=args.session_id or str(payload.get("session_id", "")),
        slug=args.slug,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def print_install_summary(ctx: InstallContext, tools: list[ToolDefinition],
                          args: argparse.Namespace) -> None:
    section_header("AI Dev Config Installation Complete")
    log(f"Project root: {ctx.project_root}")
    print()
    if args.dry_run:
        log(f"{C.MAGENTA}(dry-run){C.RESET} no changes were made.")
        print()
        return
    log("Installed configurations:")
    for tool in tools:
        if is_installed(ctx, tool):
            log(f"  {C.GREEN}✓ {tool.label}{C.RESET} ({describe_target(ctx, tool)})")
    print()
    log(f"To uninstall, run: python3 {script_path(ctx)} uninstall")
    print()


def print_uninstall_summary(ctx: InstallContext, tools: list[ToolDefinition],
                            results: dict[str, str], sessions_removed: bool,
                            args: argparse.Namespace) -> None:
    section_header("AI Dev Config Uninstallation Complete")
    log(f"Project root: {ctx.project_root}")
    print()
    log("Removed configurations:")
    for tool in tools:
        outcome = results.get(tool.name)
        if outcome == "removed":
            log(f"  {C.GREEN}✓ {tool.label}{C.RESET}")
        elif outcome == "skipped":
            log(f"  {C.YELLOW}! {tool.label}{C.RESET} (left in place)")
        else:
            log(f"  {C.DIM}- {tool.label} (not installed){C.RESET}")
    if sessions_removed:
        log(f"  {C.GREEN}✓ Session logs{C.RESET}")
    elif args.remove_sessions:
        log(f"  {C.YELLOW}! Session logs{C.RESET} (outside the project, left in place)")
    dry = f" {C.MAGENTA}(dry-run){C.RESET}" if args.dry_run else ""
    print()
    log(f"The {ctx.install_root.name}/ directory itself was not removed.{dry}")
    log("To fully remove a submodule checkout:")
    log(f"  git submodule deinit {ctx.install_root.name}")
    log(f"  git rm {ctx.install_root.name}")
    print()


def cmd_install(args: argparse.Namespace) -> None:
    tools = select_tools(args.tool)
    ctx = resolve_context(args)
    print_info("AI Dev Config Installation")
    print_info(f"Project root: {ctx.project_root}")
    verify_install_root(ctx, tools)

    reconcile("install", ctx, tools, args)
    prepare_sessions(ctx, args)
    print_install_summary(ctx, tools, args)


def cmd_uninstall(args: argparse.Namespace) -> None:
    tools = select_tools(args.tool)
    ctx = resolve_context(args)
    print_info("AI Dev Config Uninstallation")
    print_info(f"Project root: {ctx.project_root}")

    results = reconcile("uninstall", ctx, tools, args)
    sessions_removed = remove_sessions(ctx, args)
    print_uninstall_summary(ctx, tools, results, sessions_removed, args)


def cmd_status(args: argparse.Namespace) -> None:
    ctx = resolve_context(args)
    section_header("Paths")
    log(f"Install root: {ctx.install_root}")
    log(f"Project root: {ctx.project_root}")

    section_header(f"Tools ({len(TOOLS)})")
    colors = {
        STATE_OURS: C.GREEN,
        STATE_FOREIGN: C.YELLOW,
        STATE_REGULAR: C.YELLOW,
        STATE_ABSENT: C.DIM,
    }
    for tool in TOOLS.values():
        if tool.kind == KIND_MERGE:
            state = "installed" if is_installed(ctx, tool) else STATE_ABSENT
            color = C.GREEN if state == "installed" else C.DIM
        else:
            state = observe_state(ctx, tool)
            color = colors[state]
        print(f"  {C.BOLD}{tool.name:12s}{C.RESET} {color}{state:10s}{C.RESET} "
              f"{C.DIM}{describe_target(ctx, tool)}{C.RESET}")

    directory = sessions_dir(ctx)
    sessions = list_sessions(directory)
    section_header(f"Sessions ({len(sessions)})")
    log(str(directory))
    for path in sessions[-5:]:
        log(f"  {path.name}")
    print()


def cmd_log_session(args: argparse.Namespace) -> None:
    payload = read_hook_payload(sys.stdin) if args.from_hook else None
    record = record_from_args(args, payload)
    ctx = resolve_context(args)
    directory = sessions_dir(ctx)
    try:
        log_session(record, directory, args)
    except OSError as e:
        print_error(f"Could not write session log to {directory}: {e}")
        sys.exit(1)


COMMANDS: dict[str, Any] = {
    "install": cmd_install,
    "uninstall": cmd_uninstall,
    "status": cmd_status,
    "log-session": cmd_log_session,
}


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    try:
        COMMANDS[args.command](args)
    except OSError as e:
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
