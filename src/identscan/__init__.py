"""identscan - identifier extraction over tree-sitter syntax trees."""

__version__ = "0.1.0"
