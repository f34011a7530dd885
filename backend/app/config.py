from dataclasses import dataclass
from dynaconf import Dynaconf
from backend.app.constants import DEFAULTS

from graphcompose.config.settings import CompositionConfig

settings = Dynaconf(
    envvar_prefix="GRAPHCOMPOSE",
    load_dotenv=True,
    settings_files=[],
)
settings.update(DEFAULTS)


@dataclass(frozen=True)
class AppConfig:
    # ---------------- App ----------------
    app_name: str = settings.get("APP_NAME", "graphcompose-backend")
    api_prefix: str = settings.get("API_PREFIX", "")
    log_level: str = settings.get("LOG_LEVEL", "INFO")

    # ---------------- Composition Policy ----------------
    composition: CompositionConfig = CompositionConfig(
        root_alias=settings.get("ROOT_ALIAS", "root"),
        parallel_root_label=settings.get("PARALLEL_ROOT_LABEL", "Parallel"),
        choice_root_label=settings.get("CHOICE_ROOT_LABEL", "Choice"),
        enforce_acyclic=settings.get("ENFORCE_ACYCLIC", True),
        log_commits=settings.get("LOG_COMMITS", True),
    )
