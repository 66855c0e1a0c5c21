from dataclasses import dataclass
from typing import Optional

from dynaconf import Dynaconf
from backend.app.constants import DEFAULTS

from dagbuilder.config.settings import (
    StoreConfig,
    CodecConfig,
    DagBuilderConfig,
)

settings = Dynaconf(
    envvar_prefix="DAGBUILDER",
    load_dotenv=True,
    settings_files=[],
)


def _setting(key: str):
    return settings.get(key, DEFAULTS[key])


def _optional_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class AppConfig:
    # ---------------- App ----------------
    app_name: str = _setting("APP_NAME")
    api_prefix: str = _setting("API_PREFIX")

    # ---------------- Graph Policy ----------------
    dagbuilder: DagBuilderConfig = DagBuilderConfig(
        store=StoreConfig(
            id_prefix=_setting("NODE_ID_PREFIX"),
            position_min_x=float(_setting("POSITION_MIN_X")),
            position_max_x=float(_setting("POSITION_MAX_X")),
            position_min_y=float(_setting("POSITION_MIN_Y")),
            position_max_y=float(_setting("POSITION_MAX_Y")),
            position_seed=_optional_int(_setting("POSITION_SEED")),
        ),
        codec=CodecConfig(
            indent=_optional_int(_setting("EXPORT_INDENT")),
            export_filename=_setting("EXPORT_FILENAME"),
        ),
    )

    # ---------------- Data Paths ----------------
    snapshot_path: Optional[str] = _setting("SNAPSHOT_PATH")
