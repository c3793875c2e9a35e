"""
Service layer initialization.
Provides singleton instances of services.
"""
from streamhub.services.auth_service import AuthService
from streamhub.services.catalog_service import CatalogService
from streamhub.services.history_service import HistoryService
from streamhub.services.upload_service import UploadService

_upload_service = UploadService()
_auth_service = AuthService()
_history_service = HistoryService()
_catalog_service = CatalogService(_upload_service)


def get_auth_service() -> AuthService:
    return _auth_service


def get_history_service() -> HistoryService:
    return _history_service


def get_catalog_service() -> CatalogService:
    """CatalogService sharing the upload service (for image cleanup)"""
    return _catalog_service


def get_upload_service() -> UploadService:
    return _upload_service


__all__ = [
    'AuthService',
    'CatalogService',
    'HistoryService',
    'UploadService',
    'get_auth_service',
    'get_history_service',
    'get_catalog_service',
    'get_upload_service'
]
