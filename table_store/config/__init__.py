from .config import TableStoreConfig

__all__ = ["TableStoreConfig"]
