"""IssueTrack - issue lifecycle API"""

__version__ = "0.1.0"
