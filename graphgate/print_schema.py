"""Tidy up a schema's SDL text."""

from __future__ import annotations


def print_schema(sdl: str) -> str:
    """Collapse runs of blank lines, indent tab-led lines with spaces and trim the result."""
    lines = sdl.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    result: list[str] = []
    prev_line_empty = False
    for raw in lines:
        line = raw[:-1] if raw.endswith("\r") else raw
        if not line.strip():
            if not prev_line_empty:
                result.append("\n")
            prev_line_empty = True
        else:
            formatted = line.replace("\t", "  ") if line.startswith("\t") else line
            result.append(formatted + "\n")
            prev_line_empty = False
    return "".join(result).strip()