"""Typed models used across the application."""

from .article import Article, ArticleSummary
from .platform import ArticleState, ContentFormat, Platform

__all__ = ["Article", "ArticleSummary", "ArticleState", "ContentFormat", "Platform"]
