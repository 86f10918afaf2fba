# stylish_mapped/sourcemap.py

"""
Minimal reader for revision 3 JavaScript source maps.

Only the query the reporter needs is supported: given a position in the
generated file, find the position in the original source it came from.

A map's `mappings` field is a list of generated lines separated by ';'.
Each line holds ','-separated segments of 1, 4 or 5 base64 VLQ fields:

    generated column, source index, original line, original column, name index

The generated column is relative to the previous segment on the same line;
all other fields are relative to the previous occurrence across the whole map.
"""

import bisect
import json
import posixpath
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

GREATEST_LOWER_BOUND = 1
LEAST_UPPER_BOUND = 2

_BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES = {char: index for index, char in enumerate(_BASE64_CHARS)}

_VLQ_BASE_SHIFT = 5
_VLQ_BASE = 1 << _VLQ_BASE_SHIFT
_VLQ_BASE_MASK = _VLQ_BASE - 1
_VLQ_CONTINUATION_BIT = _VLQ_BASE

# Some servers prepend this to JSON responses to defeat XSSI.
_XSSI_PREFIX = ")]}'"


class SourceMapError(ValueError):
    pass


@dataclass(frozen=True)
class Mapping:
    generated_line: int
    generated_column: int
    source: Optional[int] = None
    original_line: Optional[int] = None
    original_column: Optional[int] = None
    name: Optional[int] = None


@dataclass(frozen=True)
class OriginalPosition:
    source: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    name: Optional[str] = None


def decode_vlq(segment: str) -> List[int]:
    """
    Decode one base64 VLQ segment into its list of signed integers.

    Raises SourceMapError on a character outside the base64 alphabet or when
    the segment ends in the middle of a value.
    """
    values: List[int] = []
    shift = 0
    accumulator = 0
    for char in segment:
        digit = _BASE64_VALUES.get(char)
        if digit is None:
            raise SourceMapError(f"Invalid base64 VLQ digit: {char!r}")
        accumulator += (digit & _VLQ_BASE_MASK) << shift
        if digit & _VLQ_CONTINUATION_BIT:
            shift += _VLQ_BASE_SHIFT
            continue
        negative = accumulator & 1
        value = accumulator >> 1
        values.append(-value if negative else value)
        shift = 0
        accumulator = 0
    if shift:
        raise SourceMapError(f"Truncated base64 VLQ segment: {segment!r}")
    return values


def parse_mappings(mappings: str) -> List[List[Mapping]]:
    """
    Decode a `mappings` string into one list of Mapping per generated line,
    each sorted by generated column. Lines and columns in the returned
    records are 1-based and 0-based respectively.
    """
    lines: List[List[Mapping]] = []
    source = original_line = original_column = name = 0

    for line_index, line_text in enumerate(mappings.split(";")):
        generated_column = 0
        segments: List[Mapping] = []
        for segment in line_text.split(","):
            if not segment:
                continue
            fields = decode_vlq(segment)
            if len(fields) not in (1, 4, 5):
                raise SourceMapError(
                    f"Segment {segment!r} has {len(fields)} fields, expected 1, 4 or 5"
                )
            generated_column += fields[0]
            if len(fields) == 1:
                segments.append(Mapping(line_index + 1, generated_column))
                continue

            source += fields[1]
            original_line += fields[2]
            original_column += fields[3]
            name_index = None
            if len(fields) == 5:
                name += fields[4]
                name_index = name
            segments.append(
                Mapping(
                    generated_line=line_index + 1,
                    generated_column=generated_column,
                    source=source,
                    original_line=original_line + 1,
                    original_column=original_column,
                    name=name_index,
                )
            )
        segments.sort(key=lambda m: m.generated_column)
        lines.append(segments)

    return lines


class SourceMapConsumer:
    """
    Parsed source map answering "original position for generated position".

    :param raw: the map's JSON text, or an already-decoded JSON object
    """

    def __init__(self, raw: Union[str, Dict[str, Any]]):
        data = self._load(raw) if isinstance(raw, str) else raw
        if not isinstance(data, dict):
            raise SourceMapError("Source map must be a JSON object")
        if "sections" in data:
            raise SourceMapError("Indexed source maps are not supported")
        if data.get("version") != 3:
            raise SourceMapError(f"Unsupported source map version: {data.get('version')!r}")
        mappings = data.get("mappings")
        if not isinstance(mappings, str):
            raise SourceMapError("Source map is missing its 'mappings' string")

        self.file: Optional[str] = data.get("file")
        self.source_root: str = data.get("sourceRoot") or ""
        self.names: List[str] = list(data.get("names") or [])
        self._sources: List[Optional[str]] = [
            self._join_root(s) for s in data.get("sources") or []
        ]
        self._lines = parse_mappings(mappings)
        self._columns = [[m.generated_column for m in line] for line in self._lines]

    @staticmethod
    def _load(text: str) -> Any:
        if text.startswith(_XSSI_PREFIX):
            text = text.split("\n", 1)[1] if "\n" in text else ""
        try:
            return json.loads(text)
        except ValueError as exc:
            raise SourceMapError(f"Source map is not valid JSON: {exc}") from exc

    def _join_root(self, source: Optional[str]) -> Optional[str]:
        if source is None:
            return None
        if not self.source_root or "://" in source or posixpath.isabs(source):
            return source
        return posixpath.join(self.source_root, source)

    @property
    def sources(self) -> List[Optional[str]]:
        return list(self._sources)

    def original_position_for(
        self,
        line: Optional[int],
        column: Optional[int],
        bias: int = GREATEST_LOWER_BOUND,
    ) -> OriginalPosition:
        """
        Return the original position for a generated (1-based line, column).

        With GREATEST_LOWER_BOUND the closest mapping at or before `column` on
        the same generated line is used; with LEAST_UPPER_BOUND the closest at
        or after it. An empty OriginalPosition means nothing matched.
        """
        if line is None or column is None or line < 1 or line > len(self._lines):
            return OriginalPosition()

        segments = self._lines[line - 1]
        columns = self._columns[line - 1]
        if bias == LEAST_UPPER_BOUND:
            index = bisect.bisect_left(columns, column)
        else:
            index = bisect.bisect_right(columns, column) - 1
        if index < 0 or index >= len(segments):
            return OriginalPosition()

        mapping = segments[index]
        if mapping.source is None or not 0 <= mapping.source < len(self._sources):
            return OriginalPosition()
        source = self._sources[mapping.source]
        if source is None:
            return OriginalPosition()

        name = None
        if mapping.name is not None and 0 <= mapping.name < len(self.names):
            name = self.names[mapping.name]
        return OriginalPosition(
            source=source,
            line=mapping.original_line,
            column=mapping.original_column,
            name=name,
        )
