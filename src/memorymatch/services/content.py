from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _optional_str(obj: Mapping[str, object], key: str) -> str | None:
    v = obj.get(key)
    if v is None:
        return None
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


@dataclass(frozen=True)
class FaceDefinition:
    key: str
    name: str
    art_path: str


@dataclass(frozen=True)
class FaceSet:
    id: str
    title: str
    card_back: str
    faces: tuple[FaceDefinition, ...]
    background: str | None = None

    @property
    def keys(self) -> list[str]:
        return [f.key for f in self.faces]

    def art_for(self, key: str) -> str | None:
        for f in self.faces:
            if f.key == key:
                return f.art_path
        return None


@dataclass(frozen=True)
class FaceCatalog:
    face_sets: dict[str, FaceSet]
    default_id: str
    sfx: dict[str, str]

    def get(self, face_set_id: str | None) -> FaceSet:
        """Look up a face set, falling back to the default for unknown ids."""
        if face_set_id is not None and face_set_id in self.face_sets:
            return self.face_sets[face_set_id]
        return self.face_sets[self.default_id]

    def ids(self) -> list[str]:
        return sorted(self.face_sets.keys())


def _parse_face_set(raw: Mapping[str, object]) -> FaceSet:
    set_id = _require_str(raw, "id")
    faces_raw = raw.get("faces")
    if not isinstance(faces_raw, list):
        raise ContentError(f"face set {set_id}: faces must be a list")

    faces: list[FaceDefinition] = []
    seen: set[str] = set()
    for f in faces_raw:
        if not isinstance(f, dict):
            continue
        key = _require_str(f, "key")
        # Every key must be unique or the pairing invariant breaks
        if key in seen:
            raise ContentError(f"face set {set_id}: duplicate face key {key!r}")
        seen.add(key)
        faces.append(
            FaceDefinition(
                key=key,
                name=_optional_str(f, "name") or key.replace("_", " ").title(),
                art_path=_require_str(f, "art_path"),
            )
        )

    return FaceSet(
        id=set_id,
        title=_require_str(raw, "title"),
        card_back=_require_str(raw, "card_back"),
        background=_optional_str(raw, "background"),
        faces=tuple(faces),
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_faces(self) -> FaceCatalog:
        path = self._data_dir / "faces.json"
        schema = _load_json(self._schema_dir / "faces.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("faces.json must be an object")

        raw_sets = raw.get("face_sets")
        if not isinstance(raw_sets, list):
            raise ContentError("faces.json.face_sets must be a list")
        face_sets: dict[str, FaceSet] = {}
        for item in raw_sets:
            if not isinstance(item, dict):
                continue
            fs = _parse_face_set(item)
            if fs.id in face_sets:
                raise ContentError(f"Duplicate face set id: {fs.id}")
            face_sets[fs.id] = fs

        default_id = _require_str(raw, "default_face_set")
        if default_id not in face_sets:
            raise ContentError(f"default_face_set {default_id!r} is not defined")

        sfx: dict[str, str] = {}
        raw_sfx = raw.get("sfx", {})
        if isinstance(raw_sfx, dict):
            for k, v in raw_sfx.items():
                if isinstance(k, str) and isinstance(v, str):
                    sfx[k] = v

        return FaceCatalog(face_sets=face_sets, default_id=default_id, sfx=sfx)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_faces()
