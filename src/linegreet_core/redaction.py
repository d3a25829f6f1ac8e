from __future__ import annotations

import re

# Conservative redaction: hide common token/secret patterns while keeping the rest readable.
_SECRET_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(?i)(api[_-]?key|token|secret|password)\s*[:=]\s*([^\s,;]+)"),
    re.compile(r"(?i)\b(bearer)\s+([a-z0-9\-\._~\+\/]+=*)"),
]

# CSI (colours, cursor moves), OSC (titles, hyperlinks), then two-byte and nF escapes
# such as ESC c (reset) or ESC 7 / ESC 8 (cursor save/restore).
_ANSI_PATTERN = re.compile(
    r"\x1b\[[0-9;?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[ -/]*[0-~]"
)
# Leftover C0/C1 controls (bare ESC, BEL, CR, backspace, ...); tab is kept.
_CONTROL_PATTERN = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")


def redact(text: str) -> str:
    """Redact likely secrets from a string (best-effort, non-destructive)."""
    redacted = text
    for pat in _SECRET_PATTERNS:
        redacted = pat.sub(lambda m: f"{m.group(1)} [REDACTED]", redacted)
    return redacted


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences and control characters from untrusted text."""
    return _CONTROL_PATTERN.sub("", _ANSI_PATTERN.sub("", text))
