from fastapi import Request

from catalog_sync.services.sync_coordinator import SyncCoordinator


def get_coordinator(request: Request) -> SyncCoordinator:
    """Dependency returning the coordinator built at startup."""
    return request.app.state.coordinator
