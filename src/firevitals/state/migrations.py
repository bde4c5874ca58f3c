"""Schema migration chain for persisted state blobs.

Each hop is a pure ``dict -> dict`` function keyed by the version it
upgrades *from*. :func:`run_migrations` composes them until the blob
reaches :data:`~firevitals._constants.SCHEMA_VERSION`. No hop touches
storage; the state store decides when to persist the result.

Version history:

* **v1**: single implicit scene stored flat as
  ``{firefighters, selectedFirefighterId, vitals}``. Firefighters carry a
  single ``name``; vitals use short keys (``hr``, ``rr``, ``spo2``,
  ``bpSys``, ``bpDia``, ``tempF``).
* **v2**: ``{currentSceneId, scenes, settings}`` with split names and
  long vitals keys.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from firevitals._constants import LEGACY_SCENE_ID, LEGACY_SCENE_NAME, SCHEMA_VERSION
from firevitals.models.scene import FirefighterStatus

Migration = Callable[[dict[str, Any], int], dict[str, Any]]

_V1_VITALS_KEYS: dict[str, str] = {
    "hr": "heartRate",
    "rr": "respRate",
    "spo2": "oxygenSat",
    "bpSys": "bpSystolic",
    "bpDia": "bpDiastolic",
    "tempF": "temperatureF",
}


def is_v1_blob(blob: Any) -> bool:
    """Whether *blob* has the flat single-scene shape."""
    return (
        isinstance(blob, Mapping)
        and isinstance(blob.get("firefighters"), list)
        and isinstance(blob.get("vitals"), list)
    )


def split_legacy_name(name: str) -> tuple[str, str]:
    """Split a single ``name`` into ``(first, last)``.

    The first whitespace-delimited token becomes the first name and the
    remaining tokens, joined by single spaces, the last name. Compound
    first names end up partly in the last name; the original string is
    not kept.
    """
    tokens = name.split()
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])


def migrate_v1_firefighter(raw: Mapping[str, Any]) -> dict[str, Any]:
    migrated = {key: value for key, value in raw.items() if key != "name"}
    if "name" in raw and "firstName" not in raw and "lastName" not in raw:
        first, last = split_legacy_name(str(raw.get("name") or ""))
        migrated["firstName"] = first
        migrated["lastName"] = last
    status = FirefighterStatus.parse(raw.get("status"))
    if status is None:
        migrated.pop("status", None)
    else:
        migrated["status"] = status.value
    return migrated


def migrate_v1_vitals(raw: Mapping[str, Any]) -> dict[str, Any]:
    migrated: dict[str, Any] = {}
    for key, value in raw.items():
        new_key = _V1_VITALS_KEYS.get(key, key)
        # A long key written by a half-upgraded build wins over the short one.
        if new_key in migrated and key != new_key:
            continue
        migrated[new_key] = value
    return migrated


def migrate_v1_to_v2(blob: dict[str, Any], now_ms: int) -> dict[str, Any]:
    """Wrap the flat v1 roster and vitals log into one synthetic scene."""
    firefighters = [migrate_v1_firefighter(item) for item in blob.get("firefighters", []) if isinstance(item, Mapping)]
    vitals = [migrate_v1_vitals(item) for item in blob.get("vitals", []) if isinstance(item, Mapping)]

    scene: dict[str, Any] = {
        "id": LEGACY_SCENE_ID,
        "name": LEGACY_SCENE_NAME,
        "createdAt": now_ms,
        "updatedAt": now_ms,
        "firefighters": firefighters,
        "vitals": vitals,
    }
    selected = blob.get("selectedFirefighterId")
    if isinstance(selected, str) and any(item.get("id") == selected for item in firefighters):
        scene["selectedFirefighterId"] = selected

    return {"currentSceneId": LEGACY_SCENE_ID, "scenes": [scene]}


MIGRATIONS: dict[int, Migration] = {
    1: migrate_v1_to_v2,
}


def run_migrations(blob: dict[str, Any], from_version: int, *, now_ms: int) -> dict[str, Any]:
    """Apply every hop from *from_version* up to the current schema version."""
    if from_version > SCHEMA_VERSION:
        raise ValueError(f"blob version {from_version} is newer than supported version {SCHEMA_VERSION}")
    version = from_version
    result = blob
    while version < SCHEMA_VERSION:
        hop = MIGRATIONS.get(version)
        if hop is None:
            raise ValueError(f"no migration registered from schema version {version}")
        result = hop(result, now_ms)
        version += 1
    return result
