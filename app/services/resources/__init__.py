from app.services.resources.service import GameResources, collection_index

__all__ = ["GameResources", "collection_index"]
