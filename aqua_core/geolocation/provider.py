"""
Geolocation — best-effort user position.

Denial is a soft failure: the configured default coordinates stay in effect
and nothing is surfaced to classification or validation.
"""

import logging
from typing import Optional, Protocol

from aqua_core.errors import GeolocationDenied
from aqua_core.models.pollution import Coordinates

logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    async def current_position(self) -> Coordinates:
        """One-shot position request. Raises GeolocationDenied on refusal."""
        ...


class StaticGeolocationProvider:
    """Provider with a fixed answer; `None` behaves like a denied permission."""

    def __init__(self, position: Optional[Coordinates] = None):
        self.position = position

    async def current_position(self) -> Coordinates:
        if self.position is None:
            raise GeolocationDenied("Location access denied")
        return self.position


async def resolve_user_location(
    provider: Optional[GeolocationProvider],
    default: Coordinates,
) -> Coordinates:
    """The provider's position, or `default` when there is none to be had."""
    if provider is None:
        return default
    try:
        return await provider.current_position()
    except GeolocationDenied as e:
        logger.info("Location access denied (%s); using default coordinates", e)
        return default
