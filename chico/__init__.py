"""create-chico-app: scaffold Next.js projects from a template."""

__version__ = "1.0.0"
