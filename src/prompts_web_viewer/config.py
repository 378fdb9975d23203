"""Runtime configuration read from the environment."""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

T = TypeVar("T")

DEFAULT_PORT = 3001
DEFAULT_HOST = "127.0.0.1"
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_EXCLUDE_NAMES: tuple[str, ...] = ("node_modules",)


@dataclass
class ViewerConfig:
    """Settings for serving or building the knowledge base."""

    root: Path = field(default_factory=Path.cwd)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    watch: bool = True
    poll_interval: float = DEFAULT_POLL_INTERVAL
    exclude_names: tuple[str, ...] = DEFAULT_EXCLUDE_NAMES
    static_dir: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ViewerConfig":
        """Build a configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            ViewerConfig populated from the environment, with defaults for
            unset variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ

        exclude = env.get("PROMPTS_VIEWER_EXCLUDE")
        static_dir = env.get("PROMPTS_VIEWER_STATIC_DIR")

        return cls(
            root=Path(env.get("PROMPTS_VIEWER_ROOT", ".")),
            host=env.get("PROMPTS_VIEWER_HOST", DEFAULT_HOST),
            port=_parse_number(env, "PORT", int, DEFAULT_PORT),
            watch=env.get("PROMPTS_VIEWER_ENV", "development") != "production",
            poll_interval=_parse_number(env, "PROMPTS_VIEWER_POLL_INTERVAL", float, DEFAULT_POLL_INTERVAL),
            exclude_names=(
                tuple(name.strip() for name in exclude.split(",") if name.strip())
                if exclude is not None
                else DEFAULT_EXCLUDE_NAMES
            ),
            static_dir=Path(static_dir) if static_dir else None,
            log_level=env.get("PROMPTS_VIEWER_LOG_LEVEL", "INFO").upper(),
        )


def _parse_number(env: Mapping[str, str], name: str, kind: Callable[[str], T], default: T) -> T:
    """Parse a numeric environment variable.

    Args:
        env: Environment mapping.
        name: Variable name.
        kind: Conversion such as ``int`` or ``float``.
        default: Value used when the variable is unset or empty.

    Returns:
        The converted value or ``default``.

    Raises:
        ValueError: If the value cannot be converted.
    """
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as exc:
        msg = f"Invalid value for {name}: {raw!r}"
        raise ValueError(msg) from exc
