"""Collaborator protocols for strcompare extension points.

Input normalization and filter pipelines live outside the engine.  Callers
plug them in without inheriting from any base class: any object with a
conformant method passes ``isinstance`` checks.

Example::

    from strcompare.protocols import Normalizer

    class CaseFolder:
        def normalize(self, text: str, flags: str) -> str:
            return text.casefold() if "i" in flags else text

    assert isinstance(CaseFolder(), Normalizer)  # True — structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["Normalizer", "TextFilter"]


@runtime_checkable
class Normalizer(Protocol):
    """Structural protocol for input normalizers.

    ``normalize`` receives one input string and a flag string whose meaning
    is defined by the normalizer (e.g. ``"i"`` for case folding) and returns
    the string the engine should compare.  It must be deterministic: the same
    text and flags always produce the same output.
    """

    def normalize(self, text: str, flags: str) -> str: ...


@runtime_checkable
class TextFilter(Protocol):
    """A single text transformation step: ``filter(text) -> text``."""

    def __call__(self, text: str) -> str: ...
