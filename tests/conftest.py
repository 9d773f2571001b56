"""Shared fixtures for ai_dev_config tests."""

from __future__ import annotations

import argparse
import importlib.util
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Load the script as a module (not in a package).
# Register in sys.modules so all test files share the SAME instance.
# ---------------------------------------------------------------------------

_SCRIPT = Path(__file__).parent.parent / "scripts" / "ai_dev_config.py"

if "ai_dev_config" not in sys.modules:
    _spec = importlib.util.spec_from_file_location("ai_dev_config", _SCRIPT)
    _mod = importlib.util.module_from_spec(_spec)
    sys.modules["ai_dev_config"] = _mod
    _spec.loader.exec_module(_mod)

mod = sys.modules["ai_dev_config"]

CODEX_SOURCE = 'approval_policy = "on-request"\n'
FIXED_NOW = datetime(2026, 3, 14, 15, 9, 26)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_project(tmp_path, monkeypatch):
    """A git project with this repo checked out as a `.ai-dev-config` submodule.

    Returns the resolved InstallContext. The global Codex config lives under a
    fake home via CODEX_HOME.
    """
    project = tmp_path / "project"
    (project / ".git").mkdir(parents=True)

    install_root = project / ".ai-dev-config"
    (install_root / "claude-code" / "hooks").mkdir(parents=True)
    (install_root / "claude-code" / "settings.json").write_text("{}\n")
    hook = install_root / "claude-code" / "hooks" / "log-session.sh"
    hook.write_text("#!/usr/bin/env bash\n")
    hook.chmod(0o644)
    (install_root / "gemini-cli").mkdir()
    (install_root / "gemini-cli" / "settings.json").write_text("{}\n")
    (install_root / "opencode").mkdir()
    (install_root / "opencode" / "opencode.json").write_text('{"autoupdate": true}\n')
    (install_root / "codex").mkdir()
    (install_root / "codex" / "config.toml").write_text(CODEX_SOURCE)
    # Submodules carry a .git file, which must not stop the project search.
    (install_root / ".git").write_text("gitdir: ../.git/modules/.ai-dev-config\n")

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(mod, "INSTALL_ROOT", install_root)
    monkeypatch.setattr(Path, "home", staticmethod(lambda: home))
    monkeypatch.setenv("CODEX_HOME", str(home / ".codex"))
    monkeypatch.delenv("AI_SESSIONS_DIR", raising=False)

    return mod.resolve_context(make_args())


@pytest.fixture
def fixed_now(monkeypatch):
    monkeypatch.setattr(mod, "now", lambda: FIXED_NOW)
    return FIXED_NOW


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_args(**overrides: Any) -> argparse.Namespace:
    """Create an argparse.Namespace with sensible test defaults."""
    defaults: dict[str, Any] = {
        "dry_run": False,
        "verbose": False,
        "project_root": None,
        "command": "install",
        "tool": None,
        "no_backup": False,
        "log_to_git": False,
        "remove_codex": False,
        "remove_sessions": False,
    }
    defaults.update(overrides)
    return argparse.Namespace(**defaults)


def session_args(**overrides: Any) -> argparse.Namespace:
    defaults: dict[str, Any] = {
        "command": "log-session",
        "tool": "claude-code",
        "slug": "",
        "prompt": "",
        "plan": "",
        "files_changed": [],
        "outcome": "",
        "session_id": "",
        "from_hook": False,
    }
    defaults.update(overrides)
    return make_args(**defaults)
