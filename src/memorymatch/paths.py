from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    repo_root: Path
    data_dir: Path
    schema_dir: Path
    assets_dir: Path
    userdata_dir: Path

    @property
    def profile_path(self) -> Path:
        return self.userdata_dir / "profile.json"

    @property
    def scores_path(self) -> Path:
        return self.userdata_dir / "scores.json"

    @property
    def telemetry_path(self) -> Path:
        return self.userdata_dir / "telemetry.jsonl"


def get_paths() -> Paths:
    # src/memorymatch/paths.py -> parents: [memorymatch, src, repo_root]
    repo_root = Path(__file__).resolve().parents[2]
    data_dir = repo_root / "src" / "memorymatch" / "data"
    return Paths(
        repo_root=repo_root,
        data_dir=data_dir,
        schema_dir=data_dir / "schemas",
        assets_dir=repo_root / "assets",
        userdata_dir=repo_root / "userdata",
    )
