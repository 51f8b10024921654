"""
Mars Photo API: Adapter Dispatch
==================================

What:  Picks the upstream adapter for a rover.
How:   Fixed table keyed by RoverId. Rovers missing from the table have no
       structured feed and raise NotSupportedError.

    curiosity     → CuriosityAdapter     (raw image items API)
    perseverance  → PerseveranceAdapter  (RSS API, JSON mode)
    opportunity   → NotSupportedError    (HTML pages only)
    spirit        → NotSupportedError    (HTML pages only)
"""

from types import MappingProxyType
from typing import Mapping, Type

import httpx

from mars_photos.exceptions import NotSupportedError
from mars_photos.models.rover import Rover, RoverId
from mars_photos.services.curiosity_service import CuriosityAdapter
from mars_photos.services.perseverance_service import PerseveranceAdapter
from mars_photos.services.upstream_base import UpstreamAdapter

ADAPTERS: Mapping[RoverId, Type[UpstreamAdapter]] = MappingProxyType({
    RoverId.CURIOSITY: CuriosityAdapter,
    RoverId.PERSEVERANCE: PerseveranceAdapter,
})


def has_adapter(rover: Rover) -> bool:
    return rover.rover_id in ADAPTERS


def get_adapter(rover: Rover, client: httpx.AsyncClient) -> UpstreamAdapter:
    """
    Build the adapter for a rover around the request's HTTP client.

    Raises:
        NotSupportedError: The rover has no structured upstream feed.
    """
    adapter_cls = ADAPTERS.get(rover.rover_id)
    if adapter_cls is None:
        raise NotSupportedError(rover_name=rover.name)
    return adapter_cls(rover, client)
