"""
API layer - FastAPI integration for Digest headers.

This layer contains:
- Request guard dependencies (Digest header, Content-Length, verified body)
- Response middleware attaching Digest headers
- Error response models
- A demo application (create_app)
"""

__all__: list[str] = []
