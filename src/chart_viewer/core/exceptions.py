"""Error taxonomy for the catalog and rendering layer."""


class ChartViewerError(Exception):
    """Base class for every failure surfaced by Chart Viewer."""


class CacheUnavailable(ChartViewerError):
    """The cache store could not be reached or answered with an error."""


class CacheWriteFailed(ChartViewerError):
    """A freshly fetched value could not be written back to the cache."""


class UpstreamFetchFailed(ChartViewerError):
    """The chart index or the chart source failed, timed out or returned garbage."""


class RepositoryNotFound(UpstreamFetchFailed):
    """No repository with the requested name is registered."""


class RenderFailed(UpstreamFetchFailed):
    """The rendering engine could not render a chart."""


class DecodeFailed(ChartViewerError):
    """A payload does not have the expected shape."""


class ManifestNotFound(ChartViewerError):
    """No rendered manifests are cached for the requested hash."""


class InvalidOverrides(ChartViewerError):
    """The override values payload cannot be fingerprinted."""


class AnalysisFailed(ChartViewerError):
    """The analyzer rejected the templates."""


class SeedError(ChartViewerError):
    """A seed file is missing or malformed."""
