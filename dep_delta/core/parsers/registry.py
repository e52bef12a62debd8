"""Registry dispatching manifest diffs to the matching parser."""

from typing import List, Mapping, Optional

from ...utils.logging import get_logger
from .base import BaseDiffParser, DependencyChange
from .config import ParserConfig


class DiffParserRegistry:
    """Ordered collection of diff parsers."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize the parser registry.

        Args:
            config: Configuration used for the input-size guard
        """
        self.config = config or ParserConfig()
        self._parsers: List[BaseDiffParser] = []
        self.logger = get_logger("DiffParserRegistry")

    def register(self, parser: BaseDiffParser) -> None:
        """Register a parser.

        Parsers are tried in registration order.

        Args:
            parser: Parser instance to register
        """
        self._parsers.append(parser)

    @property
    def parsers(self) -> List[BaseDiffParser]:
        return list(self._parsers)

    def find_parser(self, filename: str) -> Optional[BaseDiffParser]:
        """Find the first parser that can handle the given file.

        Args:
            filename: Repository path of the changed file

        Returns:
            Parser that can handle the file or None
        """
        for parser in self._parsers:
            if parser.supports(filename):
                return parser
        return None

    def supports(self, filename: str) -> bool:
        """Check if any registered parser supports the given file."""
        return self.find_parser(filename) is not None

    def ecosystems(self) -> List[str]:
        """Get the ecosystems of the registered parsers, without repeats."""
        return list(dict.fromkeys(parser.ecosystem for parser in self._parsers))

    def supported_files(self) -> List[str]:
        """Get the manifest basenames accepted by the registered parsers.

        Returns:
            List of file names in registration order
        """
        names: List[str] = []
        for parser in self._parsers:
            for name in parser.supported_files:
                if name not in names:
                    names.append(name)
        return names

    def parse(self, diff_text: str, filename: str) -> List[DependencyChange]:
        """Parse one file's diff with the appropriate parser.

        Args:
            diff_text: Unified diff text for the file
            filename: Path the diff belongs to

        Returns:
            Dependency changes, empty if no parser supports the file
        """
        parser = self.find_parser(filename)
        if parser is None:
            self.logger.debug(f"No diff parser for {filename}")
            return []

        self.logger.debug(f"Parsing {filename} with {parser.__class__.__name__}")
        return parser.parse(self._guard(diff_text, filename), filename)

    def parse_all(self, diffs: Mapping[str, str]) -> List[DependencyChange]:
        """Parse diffs from multiple files.

        The same package may appear once per manifest; results are not
        deduplicated across files.

        Args:
            diffs: Mapping of filename to diff text

        Returns:
            Concatenated dependency changes in input order
        """
        changes: List[DependencyChange] = []
        for filename, diff_text in diffs.items():
            changes.extend(self.parse(diff_text, filename))
        return changes

    def _guard(self, diff_text: str, filename: str) -> str:
        limit = self.config.max_diff_lines
        if limit is None:
            return diff_text

        lines = diff_text.split("\n")
        if len(lines) <= limit:
            return diff_text

        self.logger.warning(f"Truncating diff for {filename} from {len(lines)} to {limit} lines")
        return "\n".join(lines[:limit])
