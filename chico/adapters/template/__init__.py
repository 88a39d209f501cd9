"""Template fetching adapters."""

from chico.adapters.template.tarball import TemplateAdapter, archive_url

__all__ = ["TemplateAdapter", "archive_url"]
