"""
Test fixtures and factories for agentmux unit tests.

Factory functions build model objects with sensible defaults; the sample
pane captures below are trimmed from real agent sessions.
"""

from datetime import datetime
from typing import List, Optional

from agentmux.models import Pane, RawPane
from agentmux.status_constants import STATUS_IDLE
from agentmux.tmux_utils import parse_target


def make_raw_pane(
    target: str = "main:1.0",
    command: str = "claude",
    path: str = "/home/user/project",
    pid: int = 1000,
) -> RawPane:
    session, window, pane = parse_target(target)
    return RawPane(
        target=target,
        session=session,
        window=window,
        pane=pane,
        path=path,
        command=command,
        pid=pid,
    )


def make_pane(
    target: str = "main:1.0",
    path: str = "/home/user/project",
    agent: str = "claude",
    status: str = STATUS_IDLE,
    pid: int = 1000,
    last_active: Optional[datetime] = None,
) -> Pane:
    session, window, pane = parse_target(target)
    return Pane(
        target=target,
        session=session,
        window=window,
        pane=pane,
        path=path,
        pid=pid,
        agent=agent,
        status=status,
        last_active=last_active,
    )


def ps_output(rows: List[tuple]) -> str:
    """Render (pid, ppid, comm, args) tuples as `ps -eo pid,ppid,comm,args`."""
    lines = ["  PID  PPID COMM             ARGS"]
    for pid, ppid, comm, args in rows:
        lines.append(f"{pid:>5} {ppid:>5} {comm:<16} {args}")
    return "\n".join(lines) + "\n"


# =============================================================================
# Sample pane captures
# =============================================================================

PANE_CONTENT_PERMISSION_PROMPT = """\
⏺ Bash(rm -rf build/)

 Bash command

   rm -rf build/
   Remove build artifacts

 Do you want to proceed?
 ❯ 1. Yes
   2. No, and tell Claude what to do differently (esc)
"""

PANE_CONTENT_QUESTION = """\
⏺ I found two config files that both define the port.

  Which one should be the source of truth?
"""

PANE_CONTENT_PROMPT_ECHO = """\
⏺ Done. The tests pass now.

❯ can you also check the linter?
"""

PANE_CONTENT_IDLE = """\
⏺ All 42 tests pass.

────────────────────────────────────────────────
❯
────────────────────────────────────────────────
  ? for shortcuts
"""

PANE_CONTENT_GEMINI_BUSY = """\
 ⠹ Investigating the Project (esc to cancel, 8s)

 Using: 1 GEMINI.md file
"""

PANE_CONTENT_CODEX_BUSY = """\
• Working (11s • esc to interrupt)

› Summarize recent commits
"""
