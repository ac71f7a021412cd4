"""
Live preview of generated React projects
"""

from app.modules.preview.live_preview import PreviewDocument, build_preview, clean_component_code

__all__ = ["PreviewDocument", "build_preview", "clean_component_code"]
