"""Field matching between global filters and external data sources.

Each kind of data source embedded in a document (pivots, lists, graphs...)
registers a FieldMatcher. A matcher knows its data source instances, the
model each one targets, and which field of that model every filter is
matched against.

When a new data source is created on a model that another data source
already targets, its field matchings can be copied instead of configured
from scratch.

Usage:
    registry = MatcherRegistry()
    registry.register("pivot", pivot_matcher)

    resolver = FieldMatchingResolver(registry)
    matchings = resolver.get_field_matching_for_model(filters, "res.partner")
    # {"f1": FieldMatching(chain="country_id", type="many2one")}
"""

from collections.abc import Iterator, Sequence
from typing import Protocol

from global_filters.core.logging import get_logger
from global_filters.filters.models import FieldMatching, GlobalFilter

logger = get_logger(__name__)


class FieldMatcher(Protocol):
    """Field matching source for one kind of data source."""

    def get_ids(self) -> Sequence[str]:
        """Ids of the known data source instances."""
        ...

    def get_model(self, data_source_id: str) -> str:
        """Model targeted by a data source instance."""
        ...

    def get_field_matching(self, data_source_id: str, filter_id: str) -> FieldMatching | None:
        """Field of the instance matched against a filter, if any."""
        ...


class MatcherRegistry:
    """Named FieldMatchers, iterated in registration order."""

    def __init__(self) -> None:
        self._matchers: dict[str, FieldMatcher] = {}

    def register(self, name: str, matcher: FieldMatcher) -> None:
        """Register a matcher.

        Raises:
            ValueError: If a matcher is already registered under ``name``
        """
        if name in self._matchers:
            raise ValueError(f"Field matcher '{name}' is already registered")
        self._matchers[name] = matcher
        logger.debug("field_matcher_registered", name=name)

    def unregister(self, name: str) -> None:
        """Remove a matcher. Unknown names are ignored."""
        if self._matchers.pop(name, None) is not None:
            logger.debug("field_matcher_unregistered", name=name)

    def get(self, name: str) -> FieldMatcher | None:
        return self._matchers.get(name)

    def names(self) -> list[str]:
        return list(self._matchers)

    def __iter__(self) -> Iterator[FieldMatcher]:
        return iter(list(self._matchers.values()))

    def __len__(self) -> int:
        return len(self._matchers)


class FieldMatchingResolver:
    """Derives starting field matchings for a new data source."""

    def __init__(self, registry: MatcherRegistry):
        self.registry = registry

    def get_field_matching_for_model(
        self, filters: Sequence[GlobalFilter], model: str
    ) -> dict[str, FieldMatching]:
        """Copy the field matchings of the first data source targeting ``model``.

        Only chain and type are copied. Filters the source has no matching
        for are left out. Matchings of several sources are never merged.

        Args:
            filters: Current global filters
            model: Model the new data source targets

        Returns:
            Mapping of filter id to FieldMatching, empty when nothing matches
        """
        if not filters:
            return {}

        for matcher in self.registry:
            for data_source_id in matcher.get_ids():
                if matcher.get_model(data_source_id) != model:
                    continue

                field_matching: dict[str, FieldMatching] = {}
                for global_filter in filters:
                    matched = matcher.get_field_matching(data_source_id, global_filter.id)
                    if matched:
                        field_matching[global_filter.id] = FieldMatching(
                            chain=matched.chain, type=matched.type
                        )
                return field_matching

        return {}
