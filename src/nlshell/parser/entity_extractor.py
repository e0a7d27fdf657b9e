"""Regex and keyword-table entity extraction.

Extraction never raises. An entity that cannot be found is left out of the
result and the caller falls back to the intent's declared default.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Optional

from loguru import logger

from nlshell.models.entity import (
    CustomEntity,
    DateEntity,
    EntityType,
    FileTypeEntity,
    NumberEntity,
    OperationEntity,
    PathEntity,
)

# Longer names come first so "javascript" wins over "java" and "python" over "py".
_FILE_TYPE_RE = re.compile(
    r"(?<![a-z0-9])"
    r"(python|py|rust|rs|javascript|js|typescript|ts|go|java|cpp|c\+\+|c|"
    r"shell|sh|yaml|yml|json|xml|html|css|md|markdown|txt|log)"
    r"(?![a-z0-9])",
    re.IGNORECASE,
)

_FILE_TYPE_ALIASES = {
    "python": "py",
    "rust": "rs",
    "javascript": "js",
    "typescript": "ts",
    "c++": "cpp",
    "shell": "sh",
    "markdown": "md",
}

_NUMBER_RE = re.compile(r"(?<![0-9.])([0-9]+(?:\.[0-9]+)?)")

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# ./relative, /absolute, a lone ".", or a bare directory name.
_PATH_RE = re.compile(
    r"(\./\S+|/\S+|(?<![0-9A-Za-z.])\.(?![0-9A-Za-z./])|[a-zA-Z0-9_-]+/?)"
)

_NUMERIC_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?/?")

_PATH_STOPWORDS = frozenset({
    # command verbs
    "ls", "list", "find", "grep", "search", "check", "show", "view",
    "count", "sort", "analyze", "run", "execute", "display",
    # file types
    "python", "py", "rust", "rs", "javascript", "js", "typescript", "ts",
    "go", "java", "cpp", "c", "shell", "sh", "yaml", "yml", "json", "xml",
    "html", "css", "md", "markdown", "txt", "log",
    # filler around paths
    "the", "a", "an", "in", "of", "for", "to", "and", "all", "me", "my",
    "under", "with", "by", "file", "files", "current", "directory", "dir",
    "folder", "here", "this", "largest", "smallest", "biggest", "top",
    "bottom", "recent", "latest", "lines", "code", "size",
    "kb", "mb", "gb", "tb",
})

_CURRENT_DIR_PHRASES = ("当前目录", "这里", "current directory", "current dir", "this directory")

_OPERATIONS = (
    ("统计", "count"),
    ("查找", "find"),
    ("搜索", "search"),
    ("分析", "analyze"),
    ("检查", "check"),
    ("列出", "list"),
    ("显示", "show"),
    ("排序", "sort"),
    ("grep", "grep"),
    ("count", "count"),
    ("find", "find"),
    ("search", "search"),
    ("analyze", "analyze"),
    ("check", "check"),
    ("list", "list"),
    ("sort", "sort"),
)

_RELATIVE_DATES = (
    (("今天", "today"), "today"),
    (("昨天", "yesterday"), "yesterday"),
    (("最近", "recent"), "recent"),
)

SORT_DESCENDING = "-hr"
SORT_ASCENDING = "-h"

_DESCENDING_KEYWORDS = (
    "最大", "大于", "大的", "largest", "bigger", "greater",
    "top", "最多", "降序", "descending", "desc",
)
_ASCENDING_KEYWORDS = (
    "最小", "小于", "小的", "smallest", "smaller", "less",
    "bottom", "最少", "升序", "ascending", "asc",
)


class EntityExtractor:
    def extract(
        self, text: str, expected: Mapping[str, EntityType]
    ) -> dict[str, EntityType]:
        extracted: dict[str, EntityType] = {}
        for name, shape in expected.items():
            value = self._extract_one(text, shape)
            if value is not None:
                extracted[name] = value
        return extracted

    def extract_all(self, text: str) -> dict[str, EntityType]:
        """Every built-in entity kind found in ``text``, under canonical names."""
        found = {
            "file_type": self.extract_file_type(text),
            "operation": self.extract_operation(text),
            "path": self.extract_path(text),
            "number": self.extract_number(text),
            "date": self.extract_date(text),
        }
        return {name: value for name, value in found.items() if value is not None}

    def _extract_one(self, text: str, shape: EntityType) -> Optional[EntityType]:
        if isinstance(shape, FileTypeEntity):
            return self.extract_file_type(text)
        if isinstance(shape, OperationEntity):
            return self.extract_operation(text)
        if isinstance(shape, PathEntity):
            return self.extract_path(text)
        if isinstance(shape, NumberEntity):
            return self.extract_number(text)
        if isinstance(shape, DateEntity):
            return self.extract_date(text)
        if isinstance(shape, CustomEntity):
            return self.extract_custom(text, shape.type_name)
        logger.warning(f"Unknown entity variant: {type(shape).__name__}")
        return None

    def extract_file_type(self, text: str) -> Optional[FileTypeEntity]:
        match = _FILE_TYPE_RE.search(text)
        if match is None:
            return None
        file_type = match.group(1).lower()
        return FileTypeEntity(value=_FILE_TYPE_ALIASES.get(file_type, file_type))

    def extract_operation(self, text: str) -> Optional[OperationEntity]:
        lowered = text.lower()
        for keyword, operation in _OPERATIONS:
            if keyword in lowered:
                return OperationEntity(value=operation)
        return None

    def extract_path(self, text: str) -> Optional[PathEntity]:
        for match in _PATH_RE.finditer(text):
            candidate = match.group(1)
            if self.is_path_stopword(candidate):
                continue
            return PathEntity(value=candidate)

        lowered = text.lower()
        if any(phrase in lowered for phrase in _CURRENT_DIR_PHRASES):
            return PathEntity(value=".")
        return None

    @staticmethod
    def is_path_stopword(word: str) -> bool:
        if _NUMERIC_RE.fullmatch(word):
            return True
        return word.lower().rstrip("/") in _PATH_STOPWORDS

    def extract_number(self, text: str) -> Optional[NumberEntity]:
        match = _NUMBER_RE.search(text)
        if match is None:
            return None
        value = float(match.group(1))
        if not math.isfinite(value):
            return None
        return NumberEntity(value=value)

    def extract_date(self, text: str) -> Optional[DateEntity]:
        lowered = text.lower()
        for keywords, value in _RELATIVE_DATES:
            if any(k in lowered for k in keywords):
                return DateEntity(value=value)
        match = _ISO_DATE_RE.search(text)
        if match is None:
            return None
        return DateEntity(value=match.group(0))

    def extract_custom(self, text: str, type_name: str) -> Optional[CustomEntity]:
        if type_name == "sort":
            return self.extract_sort_direction(text)
        logger.warning(f"Custom entity type '{type_name}' cannot be extracted automatically")
        return None

    def extract_sort_direction(self, text: str) -> CustomEntity:
        # Descending is the default even without a directional keyword.
        lowered = text.lower()
        if any(k in lowered for k in _DESCENDING_KEYWORDS):
            return CustomEntity(type_name="sort", value=SORT_DESCENDING)
        if any(k in lowered for k in _ASCENDING_KEYWORDS):
            return CustomEntity(type_name="sort", value=SORT_ASCENDING)
        return CustomEntity(type_name="sort", value=SORT_DESCENDING)
