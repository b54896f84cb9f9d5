"""html-embed: inline local scripts, stylesheets and images into HTML files."""

__version__ = "0.1.0"

__all__ = ["__version__"]
