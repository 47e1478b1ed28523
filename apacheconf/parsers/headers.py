"""
Block Header Decoders
Turns the tokens of an opening tag into kind-specific block attributes.
"""

import re
from typing import Callable, Dict, List

from apacheconf.errors import MalformedBlockHeader
from apacheconf.models import VIRTUAL_HOST, DIRECTORY


IP_ADDRESS = re.compile(r'^(\d+)\.(\d+)\.(\d+)\.(\d+)(?::(\d+))?$')
WILDCARD_ADDRESS = re.compile(r'^(\*|_default_)(?::(\d+))?$')


def decode_virtual_host(tokens: List[str]) -> dict:
    """<VirtualHost [a.b.c.d[:port]]>, also accepting '*' and '_default_'."""
    if not tokens:
        return {}
    if len(tokens) > 1:
        raise MalformedBlockHeader(
            f"<VirtualHost> expects a single address, got {len(tokens)}: {' '.join(tokens)}"
        )

    address = tokens[0]
    ip_match = IP_ADDRESS.match(address)
    if ip_match:
        attributes = {"ip_addr": tuple(int(octet) for octet in ip_match.group(1, 2, 3, 4))}
        if ip_match.group(5) is not None:
            attributes["port"] = int(ip_match.group(5))
        return attributes

    wildcard_match = WILDCARD_ADDRESS.match(address)
    if wildcard_match:
        attributes = {"host": wildcard_match.group(1)}
        if wildcard_match.group(2) is not None:
            attributes["port"] = int(wildcard_match.group(2))
        return attributes

    raise MalformedBlockHeader(f"Invalid <VirtualHost> address '{address}'")


def decode_directory(tokens: List[str]) -> dict:
    """<Directory path> takes exactly one path token, kept verbatim."""
    if len(tokens) != 1:
        raise MalformedBlockHeader(
            f"<Directory> expects exactly one path, got {len(tokens)}"
        )
    return {"directory": tokens[0]}


def decode_generic(tokens: List[str]) -> dict:
    return {"arguments": tuple(tokens)}


HEADER_DECODERS: Dict[str, Callable[[List[str]], dict]] = {
    VIRTUAL_HOST: decode_virtual_host,
    DIRECTORY: decode_directory,
}


def decode_header(kind: str, tokens: List[str]) -> dict:
    decoder = HEADER_DECODERS.get(kind, decode_generic)
    return decoder(tokens)
