"""FastAPI dependencies wiring storage handles into the services."""

from fastapi import Depends

from lifestory.core.storage import BlobStore, get_blob_store
from lifestory.services.assets import AssetLifecycle
from lifestory.services.collection import CollectionManager
from lifestory.services.uploads import UploadService


def get_assets(store: BlobStore = Depends(get_blob_store)) -> AssetLifecycle:
    return AssetLifecycle(store)


def get_collection(assets: AssetLifecycle = Depends(get_assets)) -> CollectionManager:
    return CollectionManager(assets)


def get_uploads(store: BlobStore = Depends(get_blob_store)) -> UploadService:
    return UploadService(store)
