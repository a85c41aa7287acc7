"""Role-based access control for the hotel management dashboard."""

__version__ = "0.3.0"
