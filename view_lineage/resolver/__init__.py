"""View set resolution."""

from view_lineage.resolver.view_set_resolver import ResolvedViewSet, ViewSetResolver

__all__ = ["ResolvedViewSet", "ViewSetResolver"]
