"""Extraction of CPE model and version from User-Agent strings."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

log = logging.getLogger(__name__)

_MODEL_LIMIT = 255
_VERSION_LIMIT = 31


@dataclass(frozen=True)
class CpeInfo:
    """Detected device model and version; NONE when unknown."""

    model: str = "NONE"
    version: str = "NONE"


@dataclass(frozen=True)
class _Rule:
    pattern: re.Pattern
    model_group: int
    version_group: int
    model_prefix: str


class CpeDetector:
    """Matches a User-Agent against built-in rules; the first match wins."""

    def __init__(self) -> None:
        self._rules: list[_Rule] = []
        self._add_rule(r"Dalvik/[\d.]+ \(Linux; U; Android [\d.]+; ([A-Z0-9]+) Build/", 1, 0)
        self._add_rule(r"Mozilla/5\.0 \(Linux; Android [\d.]+; ([^;)]+)\)", 1, 0)
        self._add_rule(r"(iPhone|iPad); iOS ([\d.]+)", 1, 2)
        self._add_rule(r"^([a-zA-Z][a-zA-Z0-9\-]+)/([\d.]+)", 1, 2)
        self._add_rule(r"TR069Client/([A-Z0-9\-]+)/([\d.]+)", 1, 2)

    def _add_rule(self, pattern: str, model_group: int,
                  version_group: int = 0, prefix: str = "") -> None:
        try:
            compiled = re.compile(pattern, re.IGNORECASE)
        except re.error as exc:
            log.warning("CpeDetector: bad regex '%s': %s", pattern, exc)
            return
        self._rules.append(_Rule(compiled, model_group, version_group, prefix))

    def detect(self, user_agent: str | None) -> CpeInfo:
        """Return the model and version found in ``user_agent``."""
        if not user_agent:
            return CpeInfo()
        for rule in self._rules:
            match = rule.pattern.search(user_agent)
            if match is None:
                continue
            model = version = "NONE"
            groups = match.re.groups
            if 0 < rule.model_group <= groups and match.group(rule.model_group) is not None:
                model = (rule.model_prefix + match.group(rule.model_group))[:_MODEL_LIMIT]
            if 0 < rule.version_group <= groups and match.group(rule.version_group) is not None:
                version = match.group(rule.version_group)[:_VERSION_LIMIT]
            return CpeInfo(model, version)
        return CpeInfo()