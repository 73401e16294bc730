"""
satglobe

Track live satellite catalogs on a 3D globe: time-gated TLE catalog
caching, three-line record parsing, name-based classification,
ECI → geodetic → render-space conversion, per-frame marker refresh and
ground-track trajectory sampling.
"""

from satglobe.domain.catalog_cache import (
    CachedCatalog,
    ElementSetCache,
    epoch_millis,
)
from satglobe.domain.classification import (
    CATEGORY_COLORS,
    Category,
    ClassificationRule,
    DEFAULT_RULES,
    classify,
)
from satglobe.domain.coordinate_frames import (
    GeodeticPosition,
    eci_to_ecef,
    ecef_to_geodetic,
    eci_to_geodetic,
    eci_to_render_position,
    geodetic_to_cartesian,
)
from satglobe.domain.element_records import (
    ParsedRecord,
    parse_element_records,
    split_catalog_text,
)
from satglobe.domain.registry import (
    SatelliteEntry,
    TrackedObject,
    TrackedObjectRegistry,
)
from satglobe.domain.refresh import (
    PositionRefreshLoop,
    refresh_all,
)
from satglobe.domain.trajectory import (
    TrajectorySample,
    TrajectorySelection,
    sample_ground_track,
    sample_trajectory,
)
from satglobe.domain.tracking_session import (
    Selection,
    TrackingConfig,
    TrackingSession,
)
from satglobe.ports.propagation import (
    PropagationError,
    PropagationResult,
)

__version__ = "1.0.0"
