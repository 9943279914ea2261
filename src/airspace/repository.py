"""Holder for the current airspace dataset.

The repository owns the published snapshot of features. A reload decodes
a complete new dataset and swaps the snapshot reference in one step;
published snapshots are never modified, so readers need no locking.

Typical usage:
    from airspace.core.config import AirspaceSettings
    from airspace.repository import AirspaceRepository

    settings = AirspaceSettings.load("config/settings.yaml")
    settings.configure_logging()

    repository = AirspaceRepository(settings)
    repository.reload()
    volumes = repository.enclosing_volumes(57.2, -2.2)
"""

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from airspace.containment import PreparedVolumes
from airspace.core.config import AirspaceSettings
from airspace.core.logging_system import LoggerMixin
from airspace.loader import read_source
from airspace.model import Feature, Point, Volume
from airspace.normaliser import DecodeWarning, decode_with_warnings


@dataclass(frozen=True)
class Snapshot:
    """One published, immutable dataset.

    Attributes:
        source: Where the data was loaded from
        features: Features in source order
        by_id: Read-only view of features keyed by identifier (last one wins
            on duplicates)
        warnings: Non-fatal decode warnings
        volumes: Volume shapes prepared for containment queries
    """

    source: str = ""
    features: tuple[Feature, ...] = ()
    by_id: Mapping[str, Feature] = field(default_factory=lambda: MappingProxyType({}))
    warnings: tuple[DecodeWarning, ...] = ()
    volumes: PreparedVolumes = field(default_factory=PreparedVolumes)


class AirspaceRepository(LoggerMixin):
    """Current airspace dataset with atomic reload.

    Attributes:
        settings: Where to load data from and how to decode it

    Examples:
        >>> repository = AirspaceRepository()
        >>> repository.reload()
        >>> for volume in repository.enclosing_volumes(51.47, -0.45):
        ...     print(volume.name)
    """

    def __init__(
        self,
        settings: AirspaceSettings | None = None,
        reader: Callable[[str, float], bytes] = read_source,
    ) -> None:
        """Initialize an empty repository.

        Args:
            settings: Load settings (defaults if None)
            reader: Function returning the document bytes for (source, timeout)
        """
        self.attach_logger("repository")
        self.settings = settings or AirspaceSettings()
        self._reader = reader
        self._reload_lock = threading.Lock()
        self._snapshot = Snapshot()

    @property
    def snapshot(self) -> Snapshot:
        """The currently published dataset."""
        return self._snapshot

    @property
    def features(self) -> tuple[Feature, ...]:
        return self._snapshot.features

    @property
    def warnings(self) -> tuple[DecodeWarning, ...]:
        """Warnings produced by the last successful reload."""
        return self._snapshot.warnings

    def reload(self) -> int:
        """Load and decode the source, then publish the new dataset.

        On failure the previous snapshot stays published and the error is
        re-raised.

        Returns:
            Number of features in the new snapshot

        Raises:
            LoaderError: If the source cannot be read
            AirspaceDecodeError: If the document is malformed
        """
        with self._reload_lock:
            source = self.settings.source
            try:
                data = self._reader(source, self.settings.timeout_s)
                result = decode_with_warnings(data, self.settings.arc_step_deg)
            except Exception:
                self._log.error("Reload from %s failed, keeping previous dataset", source)
                raise

            features = tuple(result.features)
            by_id = {feature.id: feature for feature in features}
            if len(by_id) != len(features):
                self._log.warning(
                    "%d duplicate feature ids in %s", len(features) - len(by_id), source
                )

            self._snapshot = Snapshot(
                source=source,
                features=features,
                by_id=MappingProxyType(by_id),
                warnings=tuple(result.warnings),
                volumes=PreparedVolumes(features),
            )

        self._log.info(
            "Loaded %d features from %s (%d warnings)", len(features), source, len(result.warnings)
        )
        return len(features)

    def feature(self, feature_id: str) -> Feature | None:
        """Find a feature by identifier.

        Args:
            feature_id: Feature identifier (case-sensitive)

        Returns:
            Feature if found, None otherwise
        """
        return self._snapshot.by_id.get(feature_id)

    def enclosing_volumes(self, lat: float, lon: float) -> list[Volume]:
        """Find the volumes enclosing a position in the current snapshot.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            Matching volumes (empty if none)
        """
        return self._snapshot.volumes.enclosing(Point(lon=lon, lat=lat))

    def count(self) -> int:
        """Return the number of features in the current snapshot."""
        return len(self._snapshot.features)
