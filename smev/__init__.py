"""SMEV XML-signature transform and digest utilities."""

__version__ = "1.0.0"
