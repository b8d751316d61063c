from shortfall.api.analysis import router as analysis_router
from shortfall.api.archidekt import router as archidekt_router
from shortfall.api.collection import router as collection_router
from shortfall.api.data import router as data_router
from shortfall.api.decks import router as decks_router
from shortfall.api.health import router as health_router

__all__ = [
    "analysis_router",
    "archidekt_router",
    "collection_router",
    "data_router",
    "decks_router",
    "health_router",
]
