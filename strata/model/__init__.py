"""Model-layer helpers."""

from .content_types import ContentTypeDeclaration, ContentTypeLoader

__all__ = ["ContentTypeDeclaration", "ContentTypeLoader"]
