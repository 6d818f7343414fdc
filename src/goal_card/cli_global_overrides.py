"""Global CLI flag extraction helpers."""

from __future__ import annotations

_GLOBAL_FLAGS = ("--config", "--log-level")


def extract_global_overrides(argv: list[str]) -> tuple[list[str], str, str]:
    """Pull `--config` and `--log-level` out of argv wherever they appear."""
    cleaned: list[str] = []
    values = {flag: "" for flag in _GLOBAL_FLAGS}
    idx = 0
    while idx < len(argv):
        token = argv[idx]
        if token in values:
            if idx + 1 >= len(argv):
                raise RuntimeError(f"{token} requires a value")
            values[token] = str(argv[idx + 1]).strip()
            idx += 2
            continue
        flag, sep, value = token.partition("=")
        if sep and flag in values:
            values[flag] = value.strip()
            idx += 1
            continue
        cleaned.append(token)
        idx += 1
    return cleaned, values["--config"], values["--log-level"]
