"""
Mars Photo API: Rover Registry
================================

What:  The static table of known rovers and their camera catalogs.
How:   Built once at import as a read-only mapping keyed by RoverId.
Who:   RoverService resolves every request's rover here; adapters use it
       to turn instrument codes into full camera names.

Lookup is case-insensitive: /rovers/Curiosity, /rovers/CURIOSITY and
/rovers/curiosity all resolve to the same rover.
"""

from datetime import date
from types import MappingProxyType
from typing import List, Mapping, Optional

from mars_photos.models.rover import Camera, MissionStatus, Rover, RoverId

_MER_CAMERAS = (
    Camera("FHAZ", "Front Hazard Avoidance Camera"),
    Camera("RHAZ", "Rear Hazard Avoidance Camera"),
    Camera("NAVCAM", "Navigation Camera"),
    Camera("PANCAM", "Panoramic Camera"),
    Camera("MINITES", "Miniature Thermal Emission Spectrometer (Mini-TES)"),
    Camera("ENTRY", "Entry, Descent, and Landing Camera"),
)

ROVERS: Mapping[RoverId, Rover] = MappingProxyType({
    RoverId.CURIOSITY: Rover(
        rover_id=RoverId.CURIOSITY,
        api_id=5,
        name="Curiosity",
        landing_date=date(2012, 8, 6),
        launch_date=date(2011, 11, 26),
        status=MissionStatus.ACTIVE,
        cameras=(
            Camera("FHAZ", "Front Hazard Avoidance Camera"),
            Camera("RHAZ", "Rear Hazard Avoidance Camera"),
            Camera("MAST", "Mast Camera"),
            Camera("MAST_LEFT", "Mast Camera - Left"),
            Camera("MAST_RIGHT", "Mast Camera - Right"),
            Camera("CHEMCAM", "Chemistry and Camera Complex"),
            Camera("CHEMCAM_RMI", "Chemistry and Camera Complex - Remote Micro Imager"),
            Camera("MAHLI", "Mars Hand Lens Imager"),
            Camera("MARDI", "Mars Descent Imager"),
            Camera("NAVCAM", "Navigation Camera"),
            Camera("NAV_LEFT_A", "Navigation Camera - Left A"),
            Camera("NAV_RIGHT_A", "Navigation Camera - Right A"),
        ),
    ),
    RoverId.PERSEVERANCE: Rover(
        rover_id=RoverId.PERSEVERANCE,
        api_id=6,
        name="Perseverance",
        landing_date=date(2021, 2, 18),
        launch_date=date(2020, 7, 30),
        status=MissionStatus.ACTIVE,
        cameras=(
            Camera("EDL_RUCAM", "Rover Up-Look Camera"),
            Camera("EDL_RDCAM", "Rover Down-Look Camera"),
            Camera("EDL_DDCAM", "Descent Stage Down-Look Camera"),
            Camera("EDL_PUCAM1", "Parachute Up-Look Camera A"),
            Camera("EDL_PUCAM2", "Parachute Up-Look Camera B"),
            Camera("NAVCAM_LEFT", "Navigation Camera - Left"),
            Camera("NAVCAM_RIGHT", "Navigation Camera - Right"),
            Camera("MCZ_RIGHT", "Mast Camera Zoom - Right"),
            Camera("MCZ_LEFT", "Mast Camera Zoom - Left"),
            Camera("FRONT_HAZCAM_LEFT_A", "Front Hazard Avoidance Camera - Left"),
            Camera("FRONT_HAZCAM_RIGHT_A", "Front Hazard Avoidance Camera - Right"),
            Camera("REAR_HAZCAM_LEFT", "Rear Hazard Avoidance Camera - Left"),
            Camera("REAR_HAZCAM_RIGHT", "Rear Hazard Avoidance Camera - Right"),
            Camera("SKYCAM", "MEDA Skycam"),
            Camera("SHERLOC_WATSON", "SHERLOC WATSON Camera"),
        ),
    ),
    RoverId.OPPORTUNITY: Rover(
        rover_id=RoverId.OPPORTUNITY,
        api_id=3,
        name="Opportunity",
        landing_date=date(2004, 1, 25),
        launch_date=date(2003, 7, 7),
        status=MissionStatus.COMPLETE,
        cameras=_MER_CAMERAS,
        final_sol=5111,
    ),
    RoverId.SPIRIT: Rover(
        rover_id=RoverId.SPIRIT,
        api_id=2,
        name="Spirit",
        landing_date=date(2004, 1, 4),
        launch_date=date(2003, 6, 10),
        status=MissionStatus.COMPLETE,
        cameras=_MER_CAMERAS,
        final_sol=2208,
    ),
})


def lookup_rover(identifier: Optional[str]) -> Optional[Rover]:
    """
    Resolve a rover by identifier, ignoring case and surrounding whitespace.

    Returns None for anything that is not a known rover.
    """
    if not identifier:
        return None
    try:
        rover_id = RoverId(identifier.strip().lower())
    except ValueError:
        return None
    return ROVERS[rover_id]


def all_rovers() -> List[Rover]:
    """Every rover in registry order."""
    return list(ROVERS.values())


def camera_full_name(rover: Rover, code: str) -> str:
    """Full camera name from the rover's catalog, or the raw code if unlisted."""
    camera = rover.camera(code)
    return camera.full_name if camera else code
