from __future__ import annotations

from typing import Dict

from .infra.adapters.codecs import COLLECTION_NAMES
from .infra.factory import InfraBundle
from .infra.models import CollectionImage
from .stores import AssetStore, DepartmentStore, MaterialStore, OrderStore, Registry, TechnicianStore


def load_registry(bundle: InfraBundle) -> Registry:
    """Load every collection once. A corrupt file raises ValidationError."""
    images: Dict[str, CollectionImage] = {name: bundle.collection(name).load() for name in COLLECTION_NAMES}
    return Registry(
        departments=DepartmentStore(images["departments"].records, active_count=images["departments"].counter),
        assets=AssetStore(images["assets"].records, available=images["assets"].counter),
        technicians=TechnicianStore(images["technicians"].records, active_count=images["technicians"].counter),
        orders=OrderStore(images["orders"].records),
        materials=MaterialStore(images["materials"].records),
    )


def registry_images(registry: Registry) -> Dict[str, CollectionImage]:
    return {
        "departments": CollectionImage(tuple(registry.departments.records()), registry.departments.active_count),
        "assets": CollectionImage(tuple(registry.assets.records()), registry.assets.available),
        "technicians": CollectionImage(tuple(registry.technicians.records()), registry.technicians.active_count),
        "orders": CollectionImage(tuple(registry.orders.records())),
        "materials": CollectionImage(tuple(registry.materials.records())),
    }


def save_registry(registry: Registry, bundle: InfraBundle) -> Dict[str, bool]:
    """Save each collection independently; one failed save does not stop the others."""
    results: Dict[str, bool] = {}
    for name, image in registry_images(registry).items():
        results[name] = bundle.collection(name).save(image)
    return results
