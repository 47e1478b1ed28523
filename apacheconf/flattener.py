"""
Flattener
Turns a nested Document into section and flat-key lookups, e.g.
"VirtualHost 10.10.10.2:123::Directory /usr/www::Options".
"""

from dataclasses import dataclass, field
from typing import List, Optional

from apacheconf.models import Block, Document  # pyre-ignore


GLOBAL_SECTION = "global"


@dataclass
class FlatConfig:
    """Flattened view of a parsed configuration."""
    sections: dict = field(default_factory=dict)    # Section path -> {directive: [arguments, ...]}
    flat_keys: dict = field(default_factory=dict)   # "path::Directive" -> [arguments, ...]
    blocks: list = field(default_factory=list)      # Block paths in source order

    def get(self, key: str, default=None) -> Optional[List[List[str]]]:
        """Look up a flat key. Apache directive names are case-insensitive."""
        if key in self.flat_keys:
            return self.flat_keys[key]
        wanted = self._compact(key)
        for flat_key, values in self.flat_keys.items():
            if self._compact(flat_key) == wanted:
                return values
        return default

    def has_block(self, block_path: str) -> bool:
        wanted = self._compact(block_path)
        return any(self._compact(path) == wanted for path in self.blocks)

    @staticmethod
    def _compact(key: str) -> str:
        return ' '.join(key.lower().split())


class Flattener:
    """Flattens a Document into sections keyed by block path."""

    def flatten(self, document: Document) -> FlatConfig:
        """
        Build the flattened view of a Document.

        Every directive is recorded twice: in the section of its enclosing
        block path (or "global" at top level) and under a "path::name" flat
        key. Repeated directives accumulate their argument lists in source
        order.
        """
        flat = FlatConfig()
        flat.sections[GLOBAL_SECTION] = {}

        for path, entry in document.walk():
            section = '::'.join(self.block_label(block) for block in path)

            if entry.is_block:
                full_block = f"{section}::{self.block_label(entry)}" if section else self.block_label(entry)
                flat.blocks.append(full_block)
                flat.sections.setdefault(full_block, {})
                continue

            arguments = list(entry.arguments)
            flat_key = f"{section}::{entry.name}" if section else entry.name
            flat.flat_keys.setdefault(flat_key, []).append(arguments)

            section_data = flat.sections.setdefault(section or GLOBAL_SECTION, {})
            section_data.setdefault(entry.name, []).append(arguments)

        return flat

    @staticmethod
    def block_label(block: Block) -> str:
        header = block.header_text()
        return f"{block.kind} {header}" if header else block.kind
