"""
apacheconf Data Models
Loaded file metadata and the immutable AST produced by the parser.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple, Union


VIRTUAL_HOST = "VirtualHost"
DIRECTORY = "Directory"


@dataclass
class ConfigInput:
    """Represents a loaded configuration file."""
    path: str
    content: str
    file_hash: str  # SHA-256
    file_size: int
    timestamp: str
    filename: str


@dataclass(frozen=True)
class Directive:
    """A single statement: name followed by one or more argument tokens."""
    name: str
    arguments: Tuple[str, ...]

    is_block = False

    def as_dict(self) -> dict:
        return {self.name: list(self.arguments)}


@dataclass(frozen=True)
class Block:
    """A bracketed scope such as <VirtualHost> or <Directory>."""
    kind: str
    attributes: Mapping = field(default_factory=dict)   # Kind-specific header fields, read-only
    entries: Tuple["Entry", ...] = ()

    is_block = True

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __hash__(self) -> int:
        return hash((self.kind, frozenset(self.attributes.items()), self.entries))

    @property
    def ip_addr(self) -> Optional[Tuple[int, ...]]:
        return self.attributes.get("ip_addr")

    @property
    def port(self) -> Optional[int]:
        return self.attributes.get("port")

    @property
    def directory(self) -> Optional[str]:
        return self.attributes.get("directory")

    def header_text(self) -> str:
        """Canonical text between the block kind and the closing '>'."""
        attrs = self.attributes
        if "directory" in attrs:
            return attrs["directory"]
        if "arguments" in attrs:
            return " ".join(attrs["arguments"])

        address = ""
        if "ip_addr" in attrs:
            address = ".".join(str(octet) for octet in attrs["ip_addr"])
        elif "host" in attrs:
            address = attrs["host"]
        if "port" in attrs:
            address = f"{address}:{attrs['port']}"
        return address

    def as_dict(self) -> dict:
        data = {"kind": self.kind}
        for key, value in self.attributes.items():
            data[key] = list(value) if isinstance(value, tuple) else value
        data["entries"] = [entry.as_dict() for entry in self.entries]
        return data


Entry = Union[Directive, Block]


@dataclass(frozen=True)
class Document:
    """Top-level parse result: entries in source order."""
    entries: Tuple[Entry, ...] = ()

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    def as_list(self) -> List[dict]:
        """Plain, JSON-ready representation of the whole tree."""
        return [entry.as_dict() for entry in self.entries]

    def walk(self) -> Iterator[Tuple[Tuple[Block, ...], Entry]]:
        """Yield (enclosing blocks, entry) pairs depth-first in source order."""
        pending = [((), entry) for entry in reversed(self.entries)]
        while pending:
            path, entry = pending.pop()
            yield path, entry
            if entry.is_block:
                inner = path + (entry,)
                pending.extend((inner, child) for child in reversed(entry.entries))

    def find(self, name: str) -> List[Directive]:
        """All directives called `name`, at any depth."""
        return [entry for _, entry in self.walk()
                if not entry.is_block and entry.name == name]

    def blocks(self, kind: str) -> List[Block]:
        """All blocks of the given kind, at any depth."""
        return [entry for _, entry in self.walk()
                if entry.is_block and entry.kind == kind]
