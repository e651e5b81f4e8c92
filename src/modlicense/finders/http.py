from modlicense.finders.base import BaseFinder
from modlicense.http import HttpClient


class HttpFinder(HttpClient, BaseFinder):
    """Base class for finders that make HTTP requests."""
