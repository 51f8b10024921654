"""
Mars Photo API: Rover Domain Model
====================================

What:  Immutable types describing the rovers this service knows about.
How:   Frozen dataclasses and string enums; instances are built once in
       services/rover_registry.py and never modified afterwards.
Who:   Read by the registry, the adapters (camera full names, rover
       summary embedded in each photo) and the aggregator.

Unlike the API schemas in schemas/rover.py, these carry real `date`
objects and the sol bookkeeping needed for conversions. The schemas are
what goes over the wire; these are what the code reasons about.
"""

import enum
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple


class RoverId(str, enum.Enum):
    """Identifier of every rover in the registry (lowercase rover name)."""

    CURIOSITY = "curiosity"
    PERSEVERANCE = "perseverance"
    OPPORTUNITY = "opportunity"
    SPIRIT = "spirit"


class MissionStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETE = "complete"


class CameraCategory(str, enum.Enum):
    """
    Coarse camera families spanning several specific instruments.

    FHAZ: Front hazard avoidance (FHAZ, FRONT_HAZCAM_LEFT_A, ...)
    RHAZ: Rear hazard avoidance (RHAZ, REAR_HAZCAM_LEFT, ...)
    MAST: Mast cameras (MAST, MAST_LEFT, MAST_RIGHT)
    """

    FHAZ = "FHAZ"
    RHAZ = "RHAZ"
    MAST = "MAST"


@dataclass(frozen=True)
class Camera:
    """One instrument in a rover's camera catalog."""

    name: str
    full_name: str


@dataclass(frozen=True)
class Rover:
    """
    Static rover metadata plus its camera catalog.

    Attributes:
        rover_id:     Registry key (also the URL path segment)
        api_id:       Numeric id used by the reference API payloads
        name:         Display name ("Curiosity")
        landing_date: Sol 0, anchor for every sol/date conversion
        launch_date:  Launch from Earth
        status:       active | complete
        cameras:      Ordered catalog, as listed by the mission
        final_sol:    Last sol of a completed mission; None while active
    """

    rover_id: RoverId
    api_id: int
    name: str
    landing_date: date
    launch_date: date
    status: MissionStatus
    cameras: Tuple[Camera, ...]
    final_sol: Optional[int] = None

    def camera(self, code: str) -> Optional[Camera]:
        """Catalog entry for an instrument code, or None if unlisted."""
        for camera in self.cameras:
            if camera.name == code:
                return camera
        return None
