from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

MIN_FLIP_DELAY_MS = 200
MAX_FLIP_DELAY_MS = 3000


class ProfileError(RuntimeError):
    pass


def _clamp_delay(value: int) -> int:
    return max(MIN_FLIP_DELAY_MS, min(MAX_FLIP_DELAY_MS, value))


@dataclass
class SettingsState:
    flip_delay_ms: int = 800
    face_set_id: str | None = None
    sound_enabled: bool = True
    celebrate: bool = True

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "SettingsState":
        delay = d.get("flip_delay_ms", 800)
        face_set = d.get("face_set_id")
        return SettingsState(
            flip_delay_ms=_clamp_delay(delay) if isinstance(delay, int) and not isinstance(delay, bool) else 800,
            face_set_id=face_set if isinstance(face_set, str) else None,
            sound_enabled=bool(d.get("sound_enabled", True)),
            celebrate=bool(d.get("celebrate", True)),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "flip_delay_ms": self.flip_delay_ms,
            "face_set_id": self.face_set_id,
            "sound_enabled": self.sound_enabled,
            "celebrate": self.celebrate,
        }


@dataclass
class Profile:
    version: int = 1
    settings: SettingsState = field(default_factory=SettingsState)
    games_won: int = 0

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "Profile":
        try:
            version = int(d.get("version", 1))
        except (TypeError, ValueError):
            version = 1
        settings_raw = d.get("settings", {})
        settings = SettingsState.from_dict(settings_raw) if isinstance(settings_raw, dict) else SettingsState()
        won_raw = d.get("games_won", 0)
        games_won = won_raw if isinstance(won_raw, int) and won_raw >= 0 else 0
        return Profile(version=version, settings=settings, games_won=games_won)

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "settings": self.settings.to_dict(),
            "games_won": self.games_won,
        }


class ProfileService:
    def __init__(self, profile_path: Path) -> None:
        self._path = profile_path
        self.profile = self._load_or_create()

    def _load_or_create(self) -> Profile:
        if not self._path.exists():
            prof = Profile()
            self._write(prof)
            return prof
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ProfileError(f"Corrupt profile {self._path}: {e}") from e
        if not isinstance(raw, dict):
            return Profile()
        return Profile.from_dict(raw)

    def _write(self, prof: Profile) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(prof.to_dict(), indent=2), encoding="utf-8")

    def save(self) -> bool:
        """Write the profile; on failure the in-memory copy stays authoritative."""
        try:
            self._write(self.profile)
        except OSError as e:
            logger.warning("Could not save profile to %s: %s", self._path, e)
            return False
        return True

    @property
    def settings(self) -> SettingsState:
        return self.profile.settings

    # -------- Settings --------
    def set_flip_delay(self, value_ms: int) -> int:
        self.profile.settings.flip_delay_ms = _clamp_delay(value_ms)
        self.save()
        return self.profile.settings.flip_delay_ms

    def set_face_set(self, face_set_id: str) -> None:
        self.profile.settings.face_set_id = face_set_id
        self.save()

    def set_sound_enabled(self, value: bool) -> None:
        self.profile.settings.sound_enabled = value
        self.save()

    def set_celebrate(self, value: bool) -> None:
        self.profile.settings.celebrate = value
        self.save()

    # -------- Stats --------
    def record_win(self) -> int:
        self.profile.games_won += 1
        self.save()
        return self.profile.games_won
