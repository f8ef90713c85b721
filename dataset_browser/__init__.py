"""
YOLO Dataset Browser

Creates YOLOv8 annotation datasets as folder trees on disk and serves
paginated listings of their images.
"""

__version__ = "1.0.0"
__author__ = "YOLO Dataset Team"
