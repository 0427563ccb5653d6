"""
In-memory storage: fixed resource registry + append-only results log. Nothing is persisted.
"""
import threading
from typing import List, Optional, Protocol

from relieflink.schemas.triage import AnalyzedMessage, Resource

SEED_RESOURCES = [
    {"id": "1", "name": "Apollo Hospital", "type": "Ambulance", "lat": 13.0645, "lng": 80.2504, "status": "Available"},
    {"id": "2", "name": "MMM Hospital", "type": "Ambulance", "lat": 13.0841, "lng": 80.1887, "status": "Available"},
    {"id": "3", "name": "SIMS Hospital", "type": "Ambulance", "lat": 13.0514, "lng": 80.2104, "status": "Busy"},
    {"id": "4", "name": "Relief Shelter Chennai Central", "type": "Shelter", "lat": 13.0827, "lng": 80.2707, "status": "Available"},
    {"id": "5", "name": "Anna Nagar Community Center", "type": "Shelter", "lat": 13.0850, "lng": 80.2101, "status": "Available"},
    {"id": "6", "name": "Tamil Nadu Food Bank", "type": "Food", "lat": 13.0400, "lng": 80.2400, "status": "Available"},
    {"id": "7", "name": "Amma Unavagam", "type": "Food", "lat": 13.0700, "lng": 80.2200, "status": "Available"},
    {"id": "8", "name": "Fire & Rescue Mylapore", "type": "Fire", "lat": 13.0330, "lng": 80.2677, "status": "Available"},
    {"id": "9", "name": "Chennai Police HQ", "type": "Police", "lat": 13.0418, "lng": 80.2755, "status": "Available"},
    {"id": "10", "name": "St. Thomas Mount Shelter", "type": "Shelter", "lat": 13.0035, "lng": 80.2014, "status": "Busy"},
]


class Storage(Protocol):
    def list_resources(self) -> List[Resource]:
        ...

    def record_result(self, result: AnalyzedMessage) -> None:
        ...

    def list_results(self) -> List[AnalyzedMessage]:
        ...


class InMemoryStorage:
    """Resources are fixed for the process lifetime; results are only ever appended."""

    def __init__(self, resources: Optional[List[Resource]] = None):
        if resources is None:
            resources = [Resource.model_validate(r) for r in SEED_RESOURCES]
        self._resources = list(resources)
        self._results: List[AnalyzedMessage] = []
        self._lock = threading.Lock()

    def list_resources(self) -> List[Resource]:
        return list(self._resources)

    def record_result(self, result: AnalyzedMessage) -> None:
        with self._lock:
            self._results.append(result)

    def list_results(self) -> List[AnalyzedMessage]:
        with self._lock:
            return list(self._results)


_storage = InMemoryStorage()


def get_storage() -> Storage:
    return _storage
