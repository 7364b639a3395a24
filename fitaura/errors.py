# -*- coding: utf-8 -*-
"""Error taxonomy shared by the ledger components."""

from __future__ import annotations


class InvalidInput(ValueError):
    """Rejected before touching state; nothing is persisted."""


class CorruptPersistedState(ValueError):
    """A stored document could not be decoded. Recovered by falling back to defaults."""


class CollaboratorError(RuntimeError):
    """The AI collaborator failed or returned something unusable."""
