"""
Parser Engine
Feeds loaded configuration files to the httpd.conf parser and returns
the resulting Document together with its source.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from apacheconf.errors import ParseError  # pyre-ignore
from apacheconf.input_handler import InputHandler, DEFAULT_CONFIG_PATH  # pyre-ignore
from apacheconf.models import ConfigInput, Document  # pyre-ignore
from apacheconf.parsers.httpd_parser import HttpdParser  # pyre-ignore


logger = logging.getLogger("apacheconf.engine")


@dataclass
class ParsedConfig:
    """A parsed configuration file and the text it came from."""
    source: ConfigInput
    document: Document

    @property
    def file_content(self) -> str:
        return self.source.content

    @property
    def ast(self) -> Document:
        return self.document


class ParserEngine:
    """Loads configuration files and runs them through the parser."""

    def __init__(
        self,
        parser: Optional[HttpdParser] = None,
        input_handler: Optional[InputHandler] = None
    ):
        self._parser = parser or HttpdParser()
        self._input_handler = input_handler or InputHandler()

    def parse_text(self, content: str) -> Document:
        """Parse raw httpd.conf text."""
        return self._parser.parse(content)

    def parse(self, config_input: ConfigInput) -> ParsedConfig:
        """
        Parse a loaded configuration file.

        Args:
            config_input: The loaded configuration file.

        Returns:
            ParsedConfig with the source and its Document.

        Raises:
            ParseError: If the content is not valid httpd.conf syntax.
        """
        logger.info(f"Parsing {config_input.filename}...")
        try:
            document = self._parser.parse(config_input.content)
        except ParseError as e:
            logger.warning(f"Failed to parse '{config_input.path}': {e}")
            raise

        logger.debug(f"{config_input.filename}: {len(document)} top-level entries")
        return ParsedConfig(source=config_input, document=document)

    def parse_file(self, file_path: str = DEFAULT_CONFIG_PATH) -> ParsedConfig:
        """Load a configuration file from disk and parse it."""
        config_input = self._input_handler.load_file(file_path)
        return self.parse(config_input)
