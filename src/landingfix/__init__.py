"""LandingFix - AI-assisted landing page optimization reports."""

__version__ = "1.2.0"
