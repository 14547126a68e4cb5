"""Settings persistence.

Settings live in ``settings.json`` under the directory named by the
``POLYRASTER_HOME`` environment variable, or ``~/.polyraster`` when unset.
Writes go through a temporary file in the same directory that is renamed
over the target, so readers never observe a half-written document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from .schema import RenderSettings

logger = logging.getLogger(__name__)

HOME_ENV = "POLYRASTER_HOME"
DEFAULT_HOME = "~/.polyraster"
SETTINGS_FILE = "settings.json"


def settings_home() -> Path:
    """Directory holding persisted settings (not created here)."""
    return Path(os.environ.get(HOME_ENV) or DEFAULT_HOME).expanduser()


def _write_atomic(target: Path, text: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        dir=target.parent,
        prefix=f".{target.stem}-",
        suffix=".part",
        delete=False,
        encoding="utf-8",
    ) as fh:
        fh.write(text)
        staging = Path(fh.name)
    try:
        os.replace(staging, target)
    except OSError:
        staging.unlink(missing_ok=True)
        raise


class SettingsStore:
    """Read and write :class:`RenderSettings` as JSON."""

    @classmethod
    def settings_path(cls) -> Path:
        return settings_home() / SETTINGS_FILE

    @classmethod
    def load(cls) -> RenderSettings:
        """Stored settings, or defaults when the file is absent or unusable."""
        path = cls.settings_path()
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return RenderSettings()
        except OSError as e:
            logger.warning("cannot read settings %s: %s", path, e)
            return RenderSettings()
        try:
            return RenderSettings.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("ignoring invalid settings %s: %s", path, e)
            return RenderSettings()

    @classmethod
    def save(cls, settings: RenderSettings) -> Path:
        """Persist *settings* and return the file written."""
        path = cls.settings_path()
        _write_atomic(path, settings.model_dump_json(indent=2))
        logger.debug("saved settings to %s", path)
        return path
