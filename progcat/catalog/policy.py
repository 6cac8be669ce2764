# -*- coding: utf-8 -*-
"""
Resolution Policy - Decide which catalog to present.

Runs one resolution attempt as an explicit state machine:

=====================  ===========================  ====================
state                  on success                   on failure
=====================  ===========================  ====================
TRY_STAGING            PROMOTE_AND_RELOAD           TRY_VALIDATED
PROMOTE_AND_RELOAD     return validated catalog     TRY_VALIDATED
TRY_VALIDATED          return catalog               TRY_PREINSTALLED
TRY_PREINSTALLED       return catalog               UNAVAILABLE
=====================  ===========================  ====================

When updates are disabled the attempt starts at TRY_PREINSTALLED.
Otherwise every attempt, whatever its outcome, schedules a background
refresh of the staging catalog for the next attempt.

License
-------
MIT License
Copyright (c) 2026 progcat contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# progcat internal
from progcat.catalog.errors import LoadError
from progcat.catalog.loader import CatalogLoader
from progcat.catalog.models import Catalog, CatalogSource
from progcat.catalog.refresh import CatalogRefresher
from progcat.catalog.store import LocalStore


class ResolutionState(Enum):
    TRY_STAGING = "try_staging"
    PROMOTE_AND_RELOAD = "promote_and_reload"
    TRY_VALIDATED = "try_validated"
    TRY_PREINSTALLED = "try_preinstalled"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Loaded:
    catalog: Catalog


@dataclass(frozen=True)
class Failed:
    reason: LoadError


Outcome = Union[Loaded, Failed]


_ON_SUCCESS: Dict[ResolutionState, Optional[ResolutionState]] = {
    ResolutionState.TRY_STAGING: ResolutionState.PROMOTE_AND_RELOAD,
    ResolutionState.PROMOTE_AND_RELOAD: None,
    ResolutionState.TRY_VALIDATED: None,
    ResolutionState.TRY_PREINSTALLED: None,
}

_ON_FAILURE: Dict[ResolutionState, ResolutionState] = {
    ResolutionState.TRY_STAGING: ResolutionState.TRY_VALIDATED,
    ResolutionState.PROMOTE_AND_RELOAD: ResolutionState.TRY_VALIDATED,
    ResolutionState.TRY_VALIDATED: ResolutionState.TRY_PREINSTALLED,
    ResolutionState.TRY_PREINSTALLED: ResolutionState.UNAVAILABLE,
}


@dataclass
class Resolution:
    """Result of one resolution attempt.

    Attributes
    ----------
    catalog : Optional[Catalog]
        Catalog to present, or None if every source failed.
    trail : List[Tuple[ResolutionState, Outcome]]
        Each state visited with its outcome, in order.
    """

    catalog: Optional[Catalog] = None
    trail: List[Tuple[ResolutionState, Outcome]] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return self.catalog is not None

    @property
    def source(self) -> Optional[CatalogSource]:
        return self.catalog.source if self.catalog is not None else None

    @property
    def states(self) -> List[ResolutionState]:
        return [state for state, _ in self.trail]


class ResolutionPolicy:
    """Chooses between the staging, validated and preinstalled catalogs.

    Parameters
    ----------
    store : LocalStore
        Catalog directories.
    loader : CatalogLoader
        Loads a single directory.
    refresher : Optional[CatalogRefresher]
        Background refresh scheduled after each attempt. None disables
        updates.
    """

    def __init__(
        self,
        store: LocalStore,
        loader: CatalogLoader,
        refresher: Optional[CatalogRefresher] = None,
    ) -> None:
        self._store = store
        self._loader = loader
        self._refresher = refresher

    @property
    def updates_enabled(self) -> bool:
        return self._refresher is not None

    def resolve(self) -> Resolution:
        """Run one resolution attempt.

        Never raises for catalog problems; total failure is reported
        as a Resolution without a catalog.
        """
        try:
            return self._run()
        finally:
            if self._refresher is not None:
                self._schedule_refresh()

    def _run(self) -> Resolution:
        resolution = Resolution()
        if self.updates_enabled:
            state = ResolutionState.TRY_STAGING
            try:
                self._store.recover()
            except OSError as e:
                logger.warning("Could not recover interrupted promotion: %s", e)
        else:
            logger.info("Catalog updates disabled; using preinstalled catalog")
            state = ResolutionState.TRY_PREINSTALLED

        while state is not ResolutionState.UNAVAILABLE:
            outcome = self._attempt(state)
            resolution.trail.append((state, outcome))
            if isinstance(outcome, Loaded):
                next_state = _ON_SUCCESS[state]
                if next_state is None:
                    resolution.catalog = outcome.catalog
                    logger.info(
                        "Using %s catalog from %s",
                        outcome.catalog.source.value, outcome.catalog.source_dir,
                    )
                    return resolution
                state = next_state
            else:
                next_state = _ON_FAILURE[state]
                logger.warning(
                    "%s failed (%s); moving to %s",
                    state.value, outcome.reason, next_state.value,
                )
                state = next_state

        logger.warning("No valid catalog available")
        return resolution

    def _attempt(self, state: ResolutionState) -> Outcome:
        try:
            if state is ResolutionState.TRY_STAGING:
                return Loaded(self._load(CatalogSource.STAGING))
            if state is ResolutionState.PROMOTE_AND_RELOAD:
                return self._promote_and_reload()
            if state is ResolutionState.TRY_VALIDATED:
                return Loaded(self._load(CatalogSource.VALIDATED))
            if state is ResolutionState.TRY_PREINSTALLED:
                return Loaded(self._load(CatalogSource.PREINSTALLED))
        except LoadError as e:
            return Failed(e)
        raise ValueError(f"no attempt defined for {state!r}")

    def _load(self, role: CatalogSource) -> Catalog:
        return self._loader.load(self._store.path(role), role=role)

    def _promote_and_reload(self) -> Outcome:
        logger.info("Have newly downloaded catalog; promoting it")
        try:
            validated = self._store.promote()
        except OSError as e:
            return Failed(LoadError(self._store.path(CatalogSource.STAGING), f"promotion failed: {e}"))
        return Loaded(self._loader.load(validated, role=CatalogSource.VALIDATED))

    def _schedule_refresh(self) -> None:
        try:
            self._refresher.schedule()
        except RuntimeError as e:
            # Pool already shut down.
            logger.warning("Could not schedule catalog refresh: %s", e)
