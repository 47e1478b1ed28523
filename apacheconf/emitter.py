"""
Config Emitter
Writes a Document back out as canonical httpd.conf text. Formatting of
the original source is not preserved; parsing the output yields an equal
Document.
"""

from typing import List

from apacheconf.models import Document, Entry  # pyre-ignore


class ConfigEmitter:
    """Renders Documents as canonical httpd.conf text."""

    def __init__(self, indent: str = "  "):
        self.indent = indent

    def emit(self, document: Document) -> str:
        lines: List[str] = []
        for entry in document:
            self._emit_entry(entry, 0, lines)
        return '\n'.join(lines) + '\n' if lines else ''

    def _emit_entry(self, entry: Entry, depth: int, lines: List[str]):
        prefix = self.indent * depth

        if not entry.is_block:
            lines.append(f"{prefix}{entry.name} {' '.join(entry.arguments)}")
            return

        header = entry.header_text()
        lines.append(f"{prefix}<{entry.kind} {header}>" if header else f"{prefix}<{entry.kind}>")
        for child in entry.entries:
            self._emit_entry(child, depth + 1, lines)
        lines.append(f"{prefix}</{entry.kind}>")
