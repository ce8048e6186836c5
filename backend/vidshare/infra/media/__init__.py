from .cloudinary_relay import CloudinaryMediaRelay
from .staging import stage_uploads

__all__ = ["CloudinaryMediaRelay", "stage_uploads"]
