"""Runtime settings, read from the environment."""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
JIKAN_BASE = "https://api.jikan.moe/v4"


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8000
    jikan_base: str = JIKAN_BASE
    http_timeout: float = 15.0
    assets_dir: Path = field(default=DEFAULT_ASSETS_DIR)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("ANIME_DETAIL_HOST", cls.host),
            port=int(env.get("ANIME_DETAIL_PORT", cls.port)),
            jikan_base=env.get("ANIME_DETAIL_JIKAN_BASE", JIKAN_BASE).rstrip("/"),
            http_timeout=float(env.get("ANIME_DETAIL_HTTP_TIMEOUT", cls.http_timeout)),
            assets_dir=Path(env.get("ANIME_DETAIL_ASSETS_DIR", DEFAULT_ASSETS_DIR)),
            log_level=env.get("ANIME_DETAIL_LOG_LEVEL", cls.log_level).upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    # stderr only: stdout carries the stdio transport
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
