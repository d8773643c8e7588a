"""
Image store infrastructure module.
Provides Cloudinary-backed storage for profile pictures.
"""

from .cloudinary_service import CloudinaryService, UploadedImage, cloudinary_service

__all__ = [
    "CloudinaryService",
    "UploadedImage",
    "cloudinary_service",
]
