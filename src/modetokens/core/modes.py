"""
Mode collection: all modes of one token type.

Every mode of a type must expose the same variable names so downstream
consumers can swap modes freely. Values may differ between modes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .errors import CollectionError, CollectionFinalizedError, DuplicateModeError
from .ir import ValidationResult
from .variables import VariableCollection

logger = logging.getLogger(__name__)


class ModeCollection:
    """Variable collections for one type, keyed by mode name."""

    def __init__(self, type: str, prefix: str, *, baseline: str | None = None) -> None:
        self.type = type
        self.prefix = prefix
        self._configured_baseline = baseline
        self._baseline: str | None = None
        self._modes: dict[str, VariableCollection] = {}
        self._finalized = False

    def add(self, mode_name: str, collection: VariableCollection) -> None:
        if self._finalized:
            raise CollectionFinalizedError(
                f"Cannot add mode '{mode_name}' to finalized type '{self.type}'"
            )
        if mode_name in self._modes:
            raise DuplicateModeError(f"Mode '{mode_name}' already added to type '{self.type}'")
        if collection.prefix != self.prefix:
            raise CollectionError(
                f"Mode '{mode_name}' uses prefix '{collection.prefix}' but type "
                f"'{self.type}' uses '{self.prefix}'"
            )
        if collection.mode != mode_name:
            raise CollectionError(
                f"Cannot add variables of mode '{collection.mode}' as mode '{mode_name}'"
            )
        self._modes[mode_name] = collection
        logger.debug("Registered mode %s/%s (%d variables)", self.type, mode_name, len(collection))

    def finalize(self) -> None:
        """
        Freeze every mode and derive the baseline mode.

        The baseline is the configured mode when it exists, otherwise the
        first mode added. Safe to call more than once.
        """
        if self._finalized:
            return
        for collection in self._modes.values():
            collection.finalize()
        if self._configured_baseline in self._modes:
            self._baseline = self._configured_baseline
        elif self._modes:
            self._baseline = next(iter(self._modes))
        self._finalized = True

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def validate(self) -> ValidationResult:
        """
        Check that all modes define the same variable names.

        Reports one error per (mode, missing variable) pair and never raises.
        """
        self.finalize()
        errors: list[str] = []

        if self._configured_baseline and self._configured_baseline not in self._modes:
            errors.append(
                f'Baseline mode "{self._configured_baseline}" of type "{self.type}" '
                f"is not defined"
            )

        if not self._modes:
            logger.warning("Type %s has no modes", self.type)
            return ValidationResult.from_errors(errors)

        # name -> modes defining it, in first-seen order
        defined_in: dict[str, list[str]] = {}
        for mode_name, collection in self._modes.items():
            for name in collection.names():
                defined_in.setdefault(name, []).append(mode_name)

        for mode_name, collection in self._modes.items():
            for name, owners in defined_in.items():
                if name not in collection:
                    errors.append(
                        f'Mode "{mode_name}" of type "{self.type}" is missing variable '
                        f'"{name}" (defined in: {", ".join(owners)})'
                    )

        return ValidationResult.from_errors(errors)

    def exists(self, name: str) -> bool:
        """True if any mode defines the fully prefixed variable ``name``."""
        return any(name in collection for collection in self._modes.values())

    @property
    def modes(self) -> dict[str, VariableCollection]:
        return dict(self._modes)

    def mode_names(self) -> list[str]:
        return list(self._modes)

    def get(self, mode_name: str) -> VariableCollection | None:
        return self._modes.get(mode_name)

    @property
    def baseline_mode(self) -> str | None:
        self.finalize()
        return self._baseline

    @property
    def baseline(self) -> VariableCollection | None:
        mode_name = self.baseline_mode
        return self._modes.get(mode_name) if mode_name else None

    def __iter__(self) -> Iterator[tuple[str, VariableCollection]]:
        return iter(list(self._modes.items()))

    def __len__(self) -> int:
        return len(self._modes)

    def __repr__(self) -> str:
        return f"ModeCollection(type={self.type!r}, prefix={self.prefix!r}, modes={self.mode_names()})"
