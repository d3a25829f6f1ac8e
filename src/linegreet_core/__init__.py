from .redaction import redact, strip_ansi

__all__ = ["redact", "strip_ansi"]
