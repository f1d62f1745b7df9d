"""Startup for a browse session.

Order matters here:
1. logging (so everything after is captured)
2. normalizer rules (a broken rules file is a ConfigurationError, before any fetch)
3. catalog fetch - the ONLY await in the whole system; failure is fatal
4. normalization - never fails, malformed records become warnings
5. facet index + browser, then the initial render
"""

import logging

from songshelf.application.services.catalog_browser import CatalogBrowser
from songshelf.application.services.facet_index import FacetIndex
from songshelf.application.services.normalizer import SongNormalizer
from songshelf.config import Settings, get_settings
from songshelf.domain.ports import ICatalogSource, IPresentationAdapter
from songshelf.domain.value_objects.normalizer_rules import DEFAULT_RULES
from songshelf.infrastructure.catalog import create_catalog_source, load_normalizer_rules
from songshelf.infrastructure.observability import configure_logging, log_operation

logger = logging.getLogger(__name__)


# Listen future me, this is the ONE entry point a host app needs: await it once, keep the
# returned browser, and route every UI event to its intent methods. A CatalogLoadError
# propagates unchanged - the host shows a blocking error and renders NO partial UI. There is
# no retry on purpose; reloading the page is the retry.
async def bootstrap_browser(
    settings: Settings | None = None,
    *,
    source: ICatalogSource | None = None,
    adapter: IPresentationAdapter | None = None,
    configure_logs: bool = True,
) -> CatalogBrowser:
    """Load, normalize and index the catalog, then render the initial view.

    Args:
        settings: Settings to use (default: get_settings())
        source: Catalog source override (default: built from settings.catalog)
        adapter: Presentation adapter to render into (None = headless)
        configure_logs: Set up root logging from settings (turn off when the host app
            already configured logging)

    Returns:
        Ready-to-use CatalogBrowser

    Raises:
        CatalogLoadError: If the catalog can't be fetched or parsed
        ConfigurationError: If the configured rules file is invalid
    """
    settings = settings or get_settings()

    if configure_logs:
        configure_logging(
            log_level=settings.log_level,
            json_format=settings.observability.log_json_format,
            app_name=settings.app_name,
        )
    logger.info("Starting browse session: %s", settings.app_name)

    rules = DEFAULT_RULES
    if settings.catalog.rules_path is not None:
        rules = load_normalizer_rules(settings.catalog.rules_path)

    source = source or create_catalog_source(settings.catalog)
    with log_operation(logger, "catalog_load", source=source.description):
        raw_records = await source.fetch_raw_songs()

    normalizer = SongNormalizer(rules)
    with log_operation(logger, "catalog_normalize", records=len(raw_records)):
        report = normalizer.normalize_catalog(raw_records)
    if report.warnings:
        logger.warning(
            "Catalog contained %d malformed record issue(s), %d record(s) skipped",
            len(report.warnings),
            report.skipped,
        )

    index = FacetIndex(
        report.songs,
        count_respects_text_query=settings.facets.count_respects_text_query,
        hide_zero_count_options=settings.facets.hide_zero_count_options,
    )
    browser = CatalogBrowser(
        index,
        adapter=adapter,
        slow_refresh_ms=settings.observability.slow_refresh_ms,
    )
    browser.refresh()
    logger.info(
        "Browse session ready",
        extra={"songs": len(report.songs)},
    )
    return browser
