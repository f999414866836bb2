"""
Resource lists (dropdown values) with interchangeable storage backends.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from fleetbook.models import ResourceEntry
from fleetbook.schemas.resource import ResourceType

logger = logging.getLogger(__name__)

# Names used by the browser client before lists were stored server side
LEGACY_TYPE_NAMES = {
    "consignorLocations": ResourceType.CONSIGNOR_LOCATIONS,
    "consigneeLocations": ResourceType.CONSIGNEE_LOCATIONS,
    "truckNumbers": ResourceType.TRUCK_NUMBERS,
    "natureOfGoods": ResourceType.NATURE_OF_GOODS,
}


class UnknownResourceType(ValueError):
    pass


def resolve_resource_type(value: Any) -> ResourceType:
    if isinstance(value, ResourceType):
        return value
    name = str(value)
    if name in LEGACY_TYPE_NAMES:
        return LEGACY_TYPE_NAMES[name]
    try:
        return ResourceType(name)
    except ValueError:
        raise UnknownResourceType(f"Unknown resource type: {name}")


def empty_resources() -> Dict[str, List[str]]:
    return {member.value: [] for member in ResourceType}


class ResourceStore:
    """Six ordered, duplicate-free lists of strings.

    Values are trimmed; blanks and exact duplicates are ignored on add.
    """

    def get(self) -> Dict[str, List[str]]:
        raise NotImplementedError

    def add(self, resource_type: Any, value: str) -> bool:
        raise NotImplementedError

    def remove(self, resource_type: Any, value: str) -> bool:
        raise NotImplementedError


class DatabaseResourceStore(ResourceStore):
    def __init__(self, db: Session):
        self.db = db

    def get(self) -> Dict[str, List[str]]:
        resources = empty_resources()
        entries = self.db.query(ResourceEntry).order_by(ResourceEntry.id).all()
        for entry in entries:
            if entry.resource_type in resources:
                resources[entry.resource_type].append(entry.value)
        return resources

    def add(self, resource_type: Any, value: str) -> bool:
        kind = resolve_resource_type(resource_type)
        cleaned = (value or "").strip()
        if not cleaned:
            return False
        existing = (
            self.db.query(ResourceEntry)
            .filter(ResourceEntry.resource_type == kind.value, ResourceEntry.value == cleaned)
            .first()
        )
        if existing:
            return False
        self.db.add(ResourceEntry(resource_type=kind.value, value=cleaned))
        self.db.commit()
        logger.info("Added %s resource %r", kind.value, cleaned)
        return True

    def remove(self, resource_type: Any, value: str) -> bool:
        kind = resolve_resource_type(resource_type)
        deleted = (
            self.db.query(ResourceEntry)
            .filter(ResourceEntry.resource_type == kind.value, ResourceEntry.value == value)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info("Removed %s resource %r", kind.value, value)
        return bool(deleted)


class JsonFileResourceStore(ResourceStore):
    """Keeps all six lists in one JSON document on disk."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = Lock()

    def _load(self) -> Dict[str, List[str]]:
        resources = empty_resources()
        if not self.path.exists():
            return resources
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                stored = json.load(fh) or {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to parse stored resources at {self.path}: {e}")
            return resources
        for name, values in stored.items():
            try:
                kind = resolve_resource_type(name)
            except UnknownResourceType:
                continue
            for item in values or []:
                if isinstance(item, str) and item not in resources[kind.value]:
                    resources[kind.value].append(item)
        return resources

    def _save(self, resources: Dict[str, List[str]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(resources, fh, indent=2)

    def get(self) -> Dict[str, List[str]]:
        with self._lock:
            return self._load()

    def add(self, resource_type: Any, value: str) -> bool:
        kind = resolve_resource_type(resource_type)
        cleaned = (value or "").strip()
        if not cleaned:
            return False
        with self._lock:
            resources = self._load()
            if cleaned in resources[kind.value]:
                return False
            resources[kind.value].append(cleaned)
            self._save(resources)
        logger.info("Added %s resource %r", kind.value, cleaned)
        return True

    def remove(self, resource_type: Any, value: str) -> bool:
        kind = resolve_resource_type(resource_type)
        with self._lock:
            resources = self._load()
            if value not in resources[kind.value]:
                return False
            resources[kind.value] = [item for item in resources[kind.value] if item != value]
            self._save(resources)
        logger.info("Removed %s resource %r", kind.value, value)
        return True
