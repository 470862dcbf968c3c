"""pptslides — normalized slide extraction from .pptx packages."""

__version__ = "0.1.0"
