"""Content intelligence: competitor outlines, draft scoring and article images."""
from modules.content_intelligence.client import ContentIntelligenceClient

__all__ = ["ContentIntelligenceClient"]
