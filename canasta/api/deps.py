from canasta.catalog.store import SqlCatalogStore
from canasta.db.session import get_session_factory


def get_catalog_store() -> SqlCatalogStore:
    return SqlCatalogStore(get_session_factory())
