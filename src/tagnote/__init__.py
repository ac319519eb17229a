from tagnote.errors import (
    FileReadError,
    ManifestError,
    RegistryError,
    TagnoteError,
)
from tagnote.extractor import extract_tags, traverse_file
from tagnote.filters import NO_FILTER, TagFilter
from tagnote.lexer import (
    TAG_MARKER,
    CommentDialect,
    Cursor,
    parse_line,
    parse_tags,
    skip_comments,
    skip_whitespace,
)
from tagnote.manifest import ManifestRecord, load_tagfile, parse_manifest
from tagnote.registry import (
    Context,
    Diagnostic,
    Entry,
    StagedEntry,
    Tag,
    normalize_path,
)
from tagnote.scanner import build_index, index_paths, scan_directory

__all__ = [
    "NO_FILTER",
    "TAG_MARKER",
    "CommentDialect",
    "Context",
    "Cursor",
    "Diagnostic",
    "Entry",
    "FileReadError",
    "ManifestError",
    "ManifestRecord",
    "RegistryError",
    "StagedEntry",
    "Tag",
    "TagFilter",
    "TagnoteError",
    "build_index",
    "extract_tags",
    "index_paths",
    "load_tagfile",
    "normalize_path",
    "parse_line",
    "parse_manifest",
    "parse_tags",
    "scan_directory",
    "skip_comments",
    "skip_whitespace",
    "traverse_file",
]
