"""Rewrite pass abstraction for makecode-mpy."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class RewriteRule:
    """One MakeCode call shape and what it becomes in MicroPython."""
    pattern: re.Pattern
    # Either a re.sub template ("display.scroll(\\1)") or a callable taking the match
    replacement: Union[str, Callable[[re.Match], str]]

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


class RewritePass(ABC):
    """Abstract base class for one API family of rewrites."""

    @property
    @abstractmethod
    def name(self) -> str:
        """API family tag (e.g., 'display', 'pins')."""

    @abstractmethod
    def apply(self, text: str) -> str:
        """Return the text with this family's calls rewritten."""


class RulePass(RewritePass):
    """A pass made of an ordered list of independent find/replace rules."""

    rules: tuple[RewriteRule, ...] = ()

    def apply(self, text: str) -> str:
        for rule in self.rules:
            text = rule.apply(text)
        return text


def rule(pattern: str, replacement) -> RewriteRule:
    """Compile a pattern into a RewriteRule."""
    return RewriteRule(re.compile(pattern), replacement)
