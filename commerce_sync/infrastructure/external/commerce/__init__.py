"""
Integracion HTTP con la plataforma e-commerce origen.
"""
from .image_downloader import DownloadedImage, ImageDownloader, build_image_url

__all__ = ["DownloadedImage", "ImageDownloader", "build_image_url"]
