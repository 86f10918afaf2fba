import base64
import json
import os
from collections import Counter

import pytest

from stylish_mapped.resolver import (
    PositionResolver,
    ResolutionOutcome,
    SourceMapCache,
    find_source_mapping_url,
)
from stylish_mapped.utils.file_utils import LocalFileSystem
from stylish_mapped.utils.metadata import Position
from stylish_mapped.utils.settings import DATA_URL_PREFIX

# generated line 1: col 0 -> 1:0, col 4 -> 1:4; line 2 unmapped
MAP = {
    "version": 3,
    "sources": ["../src/app.ts"],
    "names": [],
    "mappings": "AAAA,IAAI",
}


class CountingFileSystem(LocalFileSystem):
    def __init__(self):
        self.reads = Counter()

    def read_text(self, path):
        self.reads[path] += 1
        return super().read_text(path)


def _data_url(source_map, prefix=DATA_URL_PREFIX):
    payload = base64.b64encode(json.dumps(source_map).encode("utf-8")).decode("ascii")
    return prefix + payload


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return str(path)


@pytest.fixture
def external(tmp_path):
    """dist/app.js with a map file next to it pointing at src/app.ts."""
    generated = _write(
        tmp_path / "dist" / "app.js",
        "var a = 1;\n//# sourceMappingURL=app.js.map\n",
    )
    map_path = _write(tmp_path / "dist" / "app.js.map", json.dumps(MAP))
    return generated, map_path


def test_no_directive_is_identity(tmp_path):
    generated = _write(tmp_path / "plain.js", "var a = 1;\n")
    resolver = PositionResolver()
    position = Position(generated, 1, 5)

    resolution = resolver.lookup(position)
    assert resolution.outcome is ResolutionOutcome.NO_MAP
    assert resolution.position == position
    # the negative result is cached
    assert resolver.cache.get(generated).map is None


def test_missing_generated_file_is_identity_and_not_cached(tmp_path):
    missing = str(tmp_path / "missing.js")
    resolver = PositionResolver()

    assert resolver.resolve(Position(missing, 3, 2)) == Position(missing, 3, 2)
    assert missing not in resolver.cache
    assert len(resolver.cache) == 0


def test_external_map_resolves_relative_to_map(external, tmp_path):
    generated, _ = external
    resolution = PositionResolver().lookup(Position(generated, 1, 6))

    assert resolution.outcome is ResolutionOutcome.FOUND_ORIGINAL
    assert resolution.position == Position(
        os.path.abspath(str(tmp_path / "src" / "app.ts")), 1, 4
    )


def test_inline_map_prefixes_source_with_data_url(tmp_path):
    generated = _write(
        tmp_path / "inline.js",
        "var a = 1;\n//# sourceMappingURL=" + _data_url(MAP) + "\n",
    )
    resolved = PositionResolver().resolve(Position(generated, 1, 0))

    assert resolved == Position(DATA_URL_PREFIX + "../src/app.ts", 1, 0)


def test_inline_map_prefix_is_case_insensitive(tmp_path):
    url = _data_url(MAP, prefix=DATA_URL_PREFIX.upper())
    generated = _write(tmp_path / "inline.js", "x;\n//# sourceMappingURL=" + url)
    resolver = PositionResolver()

    assert resolver.resolve(Position(generated, 1, 4)).line == 1
    assert resolver.cache.get(generated).base64 is True


def test_inline_map_without_matching_mapping_keeps_generated_position(tmp_path):
    generated = _write(
        tmp_path / "inline.js",
        "var a = 1;\nvar b = 2;\n//# sourceMappingURL=" + _data_url(MAP) + "\n",
    )
    position = Position(generated, 2, 3)
    resolution = PositionResolver().lookup(position)

    assert resolution.outcome is ResolutionOutcome.NO_MATCH
    assert resolution.position == position
    assert resolution.position.source == generated


def test_missing_line_or_column_passes_through(external):
    generated, _ = external
    resolver = PositionResolver()

    assert resolver.resolve(Position(generated, None, None)) == Position(generated, None, None)
    assert resolver.resolve(Position(generated, 1, None)) == Position(generated, 1, None)


def test_missing_map_file_degrades(tmp_path):
    generated = _write(tmp_path / "app.js", "x;\n//# sourceMappingURL=gone.js.map\n")
    resolver = PositionResolver()

    assert resolver.resolve(Position(generated, 1, 1)) == Position(generated, 1, 1)
    entry = resolver.cache.get(generated)
    assert entry.map is None
    assert entry.url == os.path.abspath(str(tmp_path / "gone.js.map"))


@pytest.mark.parametrize("map_text", [
    "{not json",
    json.dumps({"version": 3, "sources": ["a.ts"], "mappings": "A!"}),
])
def test_malformed_map_file_degrades(tmp_path, map_text):
    generated = _write(tmp_path / "app.js", "x;\n//# sourceMappingURL=app.js.map\n")
    _write(tmp_path / "app.js.map", map_text)
    resolver = PositionResolver()

    assert resolver.resolve(Position(generated, 1, 1)) == Position(generated, 1, 1)
    assert resolver.cache.get(generated).map is None


def test_invalid_inline_base64_degrades(tmp_path):
    generated = _write(
        tmp_path / "app.js",
        "x;\n//# sourceMappingURL=" + DATA_URL_PREFIX + "@@@not-base64@@@\n",
    )
    assert PositionResolver().resolve(Position(generated, 1, 1)) == Position(generated, 1, 1)


def test_second_resolve_hits_the_cache(external):
    generated, map_path = external
    fs = CountingFileSystem()
    resolver = PositionResolver(fs=fs)

    first = resolver.resolve(Position(generated, 1, 0))
    second = resolver.resolve(Position(generated, 1, 6))

    assert first.column == 0
    assert second.column == 4
    assert fs.reads[generated] == 1
    assert fs.reads[os.path.abspath(map_path)] == 1


def test_negative_result_is_read_once(tmp_path):
    generated = _write(tmp_path / "plain.js", "var a = 1;\n")
    fs = CountingFileSystem()
    resolver = PositionResolver(fs=fs)

    resolver.resolve(Position(generated, 1, 1))
    resolver.resolve(Position(generated, 1, 2))
    assert fs.reads[generated] == 1


def test_cache_can_be_shared_between_resolvers(external):
    generated, _ = external
    cache = SourceMapCache()
    fs = CountingFileSystem()

    PositionResolver(cache=cache, fs=fs).resolve(Position(generated, 1, 0))
    PositionResolver(cache=cache, fs=fs).resolve(Position(generated, 1, 0))
    assert fs.reads[generated] == 1


def test_last_directive_wins(tmp_path):
    generated = _write(
        tmp_path / "app.js",
        "//# sourceMappingURL=first.js.map\n"
        "var a = 1;\n"
        "//# sourceMappingURL=" + _data_url(MAP) + "\n",
    )
    resolver = PositionResolver()
    resolver.resolve(Position(generated, 1, 0))
    assert resolver.cache.get(generated).base64 is True


@pytest.mark.parametrize("text,expected", [
    ("a;\n//# sourceMappingURL=app.js.map", "app.js.map"),
    ("a;\n//@ sourceMappingURL=app.js.map\n", "app.js.map"),
    ("a;\n   //#   sourceMappingURL=app.js.map   \n\n", "app.js.map"),
    ("a;\r\n//# sourceMappingURL=app.js.map\r\n", "app.js.map"),
    ("a;\n// sourceMappingURL=app.js.map\n", None),
    ("a;\n//# sourceMappingURL=\n", None),
    ("a;\n", None),
])
def test_find_source_mapping_url(text, expected):
    assert find_source_mapping_url(text) == expected
