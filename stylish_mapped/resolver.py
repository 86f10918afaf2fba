# stylish_mapped/resolver.py

"""
Position resolver: maps a position in a generated file back to its original
source through the file's source map.

The map is located from the last `//# sourceMappingURL=` comment of the
generated file. It can be inline (a base64 `data:` URL) or a path relative
to the generated file. Whatever goes wrong along the way (missing files,
unreadable maps, positions in generated-only code) the resolver answers
with the position it was given: a precise location in the generated file
beats a vague one in the original.

Loaded maps, and the absence of one, are cached per generated file for the
lifetime of the SourceMapCache.
"""

import base64
import binascii
import enum
import os
import re
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from urllib.parse import unquote, urlparse

from stylish_mapped.sourcemap import SourceMapConsumer, SourceMapError
from stylish_mapped.utils.file_utils import LocalFileSystem
from stylish_mapped.utils.logger import get_logger
from stylish_mapped.utils.metadata import Position
from stylish_mapped.utils.settings import DATA_URL_PREFIX, SOURCE_MAPPING_URL_PATTERN

LOG = get_logger(__name__)

_DIRECTIVE_RE = re.compile(SOURCE_MAPPING_URL_PATTERN, re.MULTILINE)


@dataclass(frozen=True)
class SourceMapEntry:
    url: Optional[str]
    base64: bool = False
    map: Optional[SourceMapConsumer] = None


class ResolutionOutcome(enum.Enum):
    FOUND_ORIGINAL = "found-original"
    NO_MAP = "no-map"
    NO_MATCH = "no-match"


@dataclass(frozen=True)
class Resolution:
    outcome: ResolutionOutcome
    position: Position


class SourceMapCache:
    """
    Generated file path -> SourceMapEntry. Entries are never evicted or
    refreshed; the lock makes check-then-populate atomic.
    """

    def __init__(self):
        self._entries: Dict[str, SourceMapEntry] = {}
        self._lock = threading.RLock()

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, path: str) -> Optional[SourceMapEntry]:
        return self._entries.get(path)

    def get_or_load(
        self,
        path: str,
        loader: Callable[[str], Optional[SourceMapEntry]],
    ) -> Optional[SourceMapEntry]:
        """
        Return the cached entry for `path`, calling `loader` on a miss.
        A loader returning None leaves the cache untouched.
        """
        with self._lock:
            entry = self._entries.get(path)
            if entry is not None:
                return entry
            entry = loader(path)
            if entry is not None:
                self._entries[path] = entry
            return entry


def find_source_mapping_url(text: str) -> Optional[str]:
    """Return the value of the last sourceMappingURL comment in `text`, if any."""
    value = None
    for match in _DIRECTIVE_RE.finditer(text):
        value = match.group(1)
    return value or None


def decode_data_url(url: str) -> str:
    """
    Decode the JSON text of an inline `data:application/json;base64,` map.

    Raises ValueError when the payload is not valid base64 or UTF-8.
    """
    payload = url[len(DATA_URL_PREFIX):].strip()
    payload += "=" * (-len(payload) % 4)
    try:
        return base64.b64decode(payload).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError(f"Invalid inline source map: {exc}") from exc


def _is_data_url(value: str) -> bool:
    return value[:len(DATA_URL_PREFIX)].lower() == DATA_URL_PREFIX


def _url_to_path(value: str) -> str:
    if value.lower().startswith("file://"):
        return unquote(urlparse(value).path)
    return value


class PositionResolver:
    """
    Resolve generated-file positions to original-source positions.

    :param cache: SourceMapCache to use; a private one is created if omitted
    :param fs: filesystem collaborator with `exists(path)` and `read_text(path)`
    """

    def __init__(self, cache: SourceMapCache = None, fs=None):
        self.cache = cache if cache is not None else SourceMapCache()
        self.fs = fs or LocalFileSystem()

    def resolve(self, position: Position) -> Position:
        """Return the best-known original position for `position`."""
        return self.lookup(position).position

    def lookup(self, position: Position) -> Resolution:
        """
        Resolve `position` and report how: FOUND_ORIGINAL with the original
        coordinates, or NO_MAP / NO_MATCH with `position` itself.
        """
        entry = self.cache.get_or_load(position.source, self._load_entry)
        if entry is None or entry.map is None:
            return Resolution(ResolutionOutcome.NO_MAP, position)

        original = entry.map.original_position_for(position.line, position.column)
        if original.source is None:
            LOG.debug(
                "No mapping for %s:%s:%s, keeping generated position",
                position.source, position.line, position.column,
            )
            return Resolution(ResolutionOutcome.NO_MATCH, position)

        if entry.base64:
            source = DATA_URL_PREFIX + original.source
        else:
            source = os.path.abspath(
                os.path.join(os.path.dirname(entry.url), _url_to_path(original.source))
            )
        return Resolution(
            ResolutionOutcome.FOUND_ORIGINAL,
            Position(source=source, line=original.line, column=original.column),
        )

    def _load_entry(self, generated_path: str) -> Optional[SourceMapEntry]:
        # Not cached: the file may still be created later in the run.
        if not self.fs.exists(generated_path):
            LOG.debug("Generated file %s does not exist", generated_path)
            return None

        try:
            text = self.fs.read_text(generated_path)
        except (OSError, UnicodeDecodeError) as exc:
            LOG.debug("Could not read %s: %s", generated_path, exc)
            return SourceMapEntry(url=None)

        url = find_source_mapping_url(text)
        if url is None:
            LOG.debug("No sourceMappingURL in %s", generated_path)
            return SourceMapEntry(url=None)

        is_inline = _is_data_url(url)
        map_text = None
        if is_inline:
            try:
                map_text = decode_data_url(url)
            except ValueError as exc:
                LOG.debug("Inline source map of %s is unreadable: %s", generated_path, exc)
        else:
            url = os.path.abspath(
                os.path.join(os.path.dirname(generated_path), _url_to_path(url))
            )
            if self.fs.exists(url):
                try:
                    map_text = self.fs.read_text(url)
                except (OSError, UnicodeDecodeError) as exc:
                    LOG.debug("Could not read source map %s: %s", url, exc)
            else:
                LOG.debug("Source map %s of %s does not exist", url, generated_path)

        source_map = None
        if map_text is not None:
            try:
                source_map = SourceMapConsumer(map_text)
                LOG.debug("Loaded source map for %s", generated_path)
            except SourceMapError as exc:
                LOG.debug("Ignoring malformed source map for %s: %s", generated_path, exc)

        return SourceMapEntry(url=url, base64=is_inline, map=source_map)
