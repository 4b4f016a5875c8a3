"""Runtime configuration for the AquaSentinel core."""

import os
from typing import Optional

from pydantic import BaseModel

from aqua_core.models.pollution import Coordinates


class AquaConfig(BaseModel):
    """Configuration shared by the API, the dialogue session and the store."""

    db_path: str = ":memory:"
    default_location: Coordinates = Coordinates(lat=19.0760, lng=72.8777)
    map_center: Coordinates = Coordinates(lat=20.5937, lng=78.9629)
    typing_delay_seconds: float = 1.0
    recent_reports_limit: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "AquaConfig":
        """Build a config from AQUA_* environment variables, keeping defaults for the rest."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            db_path=env.get("AQUA_DB_PATH", defaults.db_path),
            default_location=Coordinates(
                lat=float(env.get("AQUA_DEFAULT_LAT", defaults.default_location.lat)),
                lng=float(env.get("AQUA_DEFAULT_LNG", defaults.default_location.lng)),
            ),
            typing_delay_seconds=float(
                env.get("AQUA_TYPING_DELAY_SECONDS", defaults.typing_delay_seconds)
            ),
            recent_reports_limit=int(
                env.get("AQUA_RECENT_REPORTS_LIMIT", defaults.recent_reports_limit)
            ),
            log_level=env.get("AQUA_LOG_LEVEL", defaults.log_level).upper(),
        )
