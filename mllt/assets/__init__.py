from .sync import needs_copy, sync_assets, sync_file

__all__ = ["needs_copy", "sync_assets", "sync_file"]
