"""
YOLO Dataset Browser Test Suite

Coverage for:
- Page arithmetic and the navigation window
- Paged folder listings
- Dataset scaffold creation and validation
- API endpoints with redirects and error handling
"""

__version__ = "1.0.0"
