"""
Models Package

Exports all models for easy importing.
"""

from rampur_news.models.article import Article
from rampur_news.models.content_item import ContentItem

__all__ = ['Article', 'ContentItem']
