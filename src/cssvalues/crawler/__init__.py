"""Crawler module initialization."""

from .file_crawler import CrawledFile, FileCrawler

__all__ = ["FileCrawler", "CrawledFile"]
