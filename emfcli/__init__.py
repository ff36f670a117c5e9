"""EMF project tool: build and clean commands, YAML configuration and Python code generation."""

__version__ = "1.0.0"