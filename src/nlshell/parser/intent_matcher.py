"""Keyword, regex and fuzzy scoring of input against registered intents."""

from __future__ import annotations

import re
import threading
from collections import OrderedDict
from typing import Optional

from loguru import logger
from pydantic import BaseModel, Field

from nlshell.models.intent import Intent, IntentMatch
from nlshell.parser.edit_distance import best_similarity
from nlshell.parser.entity_extractor import EntityExtractor

KEYWORD_SCORE = 0.3
PATTERN_SCORE = 0.7
FUZZY_MARKER = "~"
DEFAULT_CACHE_CAPACITY = 100


class FuzzyConfig(BaseModel):
    enabled: bool = False
    similarity_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    fuzzy_weight: float = Field(default=0.7, ge=0.0, le=1.0)


class RegexDiagnostic(BaseModel):
    intent_name: str
    pattern: str
    error: str


class IntentMatcher:
    """Ordered intent registry with a bounded LRU cache of query results.

    The cache, its counters and the registry share one lock. Every mutation
    of the registry or of the fuzzy configuration clears the whole cache.
    """

    def __init__(
        self,
        cache_capacity: int = DEFAULT_CACHE_CAPACITY,
        fuzzy_config: FuzzyConfig | None = None,
        extractor: EntityExtractor | None = None,
    ) -> None:
        self._intents: list[Intent] = []
        self._regex_cache: dict[str, re.Pattern[str]] = {}
        self._extractor = extractor or EntityExtractor()
        self._fuzzy = fuzzy_config or FuzzyConfig()
        self._capacity = cache_capacity if cache_capacity > 0 else DEFAULT_CACHE_CAPACITY
        self._cache: OrderedDict[str, list[IntentMatch]] = OrderedDict()
        self._hits = 0
        self._misses = 0
        # Bumped on every invalidation so results computed against an older
        # registry are never stored.
        self._generation = 0
        self._lock = threading.Lock()
        self.diagnostics: list[RegexDiagnostic] = []

    # -- registry -----------------------------------------------------------

    def register(self, intent: Intent) -> None:
        compiled: dict[str, re.Pattern[str]] = {}
        for pattern in intent.patterns:
            if pattern in self._regex_cache or pattern in compiled:
                continue
            try:
                compiled[pattern] = re.compile(pattern)
            except re.error as exc:
                logger.warning(
                    f"Invalid regex pattern for intent '{intent.name}': {pattern} ({exc})"
                )
                self.diagnostics.append(
                    RegexDiagnostic(intent_name=intent.name, pattern=pattern, error=str(exc))
                )

        with self._lock:
            self._regex_cache.update(compiled)
            self._intents.append(intent)
            self._invalidate_locked()

    def clear(self) -> None:
        with self._lock:
            self._intents.clear()
            self._regex_cache.clear()
            self._reset_cache_locked()
        self.diagnostics.clear()

    @property
    def intents(self) -> list[Intent]:
        return list(self._intents)

    def __len__(self) -> int:
        return len(self._intents)

    @property
    def is_empty(self) -> bool:
        return not self._intents

    # -- fuzzy configuration ------------------------------------------------

    @property
    def fuzzy_config(self) -> FuzzyConfig:
        return self._fuzzy

    def enable_fuzzy_matching(
        self, similarity_threshold: float = 0.8, fuzzy_weight: float = 0.7
    ) -> None:
        with self._lock:
            self._fuzzy = FuzzyConfig(
                enabled=True,
                similarity_threshold=similarity_threshold,
                fuzzy_weight=fuzzy_weight,
            )
            self._reset_cache_locked()

    def disable_fuzzy_matching(self) -> None:
        with self._lock:
            self._fuzzy = FuzzyConfig(enabled=False)
            self._reset_cache_locked()

    # -- matching -----------------------------------------------------------

    def match_intent(self, text: str) -> list[IntentMatch]:
        with self._lock:
            cached = self._cache.get(text)
            if cached is not None:
                self._cache.move_to_end(text)
                self._hits += 1
                return [m.model_copy(deep=True) for m in cached]
            self._misses += 1
            generation = self._generation
            intents = list(self._intents)
            regexes = dict(self._regex_cache)
            fuzzy = self._fuzzy

        matches = [
            m
            for m in (self._score(intent, text, regexes, fuzzy) for intent in intents)
            if m is not None
        ]
        # list.sort is stable, so ties keep registry order.
        matches.sort(key=lambda m: m.confidence, reverse=True)

        with self._lock:
            if generation == self._generation:
                self._cache[text] = [m.model_copy(deep=True) for m in matches]
                self._cache.move_to_end(text)
                while len(self._cache) > self._capacity:
                    self._cache.popitem(last=False)
        return matches

    def best_match(self, text: str) -> Optional[IntentMatch]:
        matches = self.match_intent(text)
        return matches[0] if matches else None

    def _score(
        self,
        intent: Intent,
        text: str,
        regexes: dict[str, re.Pattern[str]],
        fuzzy: FuzzyConfig,
    ) -> Optional[IntentMatch]:
        tokens = text.lower().split()
        score = 0.0
        matched_keywords: list[str] = []

        for keyword in intent.keywords:
            keyword_lower = keyword.lower()
            if any(keyword_lower in token for token in tokens):
                score += KEYWORD_SCORE
                matched_keywords.append(keyword)
                continue
            if not fuzzy.enabled:
                continue
            similarity = best_similarity(keyword_lower, tokens, fuzzy.similarity_threshold)
            if similarity >= fuzzy.similarity_threshold:
                score += KEYWORD_SCORE * fuzzy.fuzzy_weight * similarity
                matched_keywords.append(f"{keyword}{FUZZY_MARKER}")

        for pattern in intent.patterns:
            regex = regexes.get(pattern)
            if regex is not None and regex.search(text):
                score += PATTERN_SCORE

        confidence = min(max(score, 0.0), 1.0)
        if not intent.meets_threshold(confidence):
            return None

        return IntentMatch(
            intent=intent,
            confidence=confidence,
            matched_keywords=matched_keywords,
            extracted_entities=self._extractor.extract(text, intent.entities),
        )

    # -- cache --------------------------------------------------------------

    def clear_cache(self) -> None:
        with self._lock:
            self._reset_cache_locked()

    def _invalidate_locked(self) -> None:
        self._cache.clear()
        self._generation += 1

    def _reset_cache_locked(self) -> None:
        self._invalidate_locked()
        self._hits = 0
        self._misses = 0

    @property
    def cache_hits(self) -> int:
        return self._hits

    @property
    def cache_misses(self) -> int:
        return self._misses

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    @property
    def cache_hit_rate(self) -> float:
        total = self._hits + self._misses
        return self._hits / total if total else 0.0
