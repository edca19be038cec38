# rota_reader/state - Upload registry
from .uploads import UploadRegistry

__all__ = ["UploadRegistry"]
