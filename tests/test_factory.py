"""Tests for LocalizerFactory caching and base-name resolution."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from sqllocalization.culture import culture_scope
from sqllocalization.data.sql import SqlDataSource
from sqllocalization.errors import ConfigurationError
from sqllocalization.factory import LocalizerFactory
from sqllocalization.localizer import StringLocalizer
from sqllocalization.naming import BaseNameRegistry, qualified_name
from sqllocalization.options import LocalizationOptions
from tests.helpers.fakes import RecordListSourceFactory, records
from tests.helpers.store import BASE_NAME

ROWS = records(("fr-FR", "Greeting", "Bonjour"), ("", "Greeting", "Hello"))


class Views:
    class Home:
        pass

    class About:
        pass


def make_factory(
    base_names: BaseNameRegistry | None = None,
) -> tuple[LocalizerFactory, RecordListSourceFactory]:
    sources = RecordListSourceFactory(ROWS)
    options = LocalizationOptions(source_args={"Table": "LocalizedStrings"})
    factory = LocalizerFactory(options, base_names=base_names, data_source_factory=sources)
    return factory, sources


class TestCreate:
    """create(owner) resolution and caching."""

    def test_class_owner_uses_qualified_name(self) -> None:
        factory, sources = make_factory()
        localizer = factory.create(Views.Home)
        assert localizer.base_name == qualified_name(Views.Home)
        assert sources.base_names == [qualified_name(Views.Home)]

    def test_same_owner_returns_same_instance(self) -> None:
        factory, sources = make_factory()
        assert factory.create(Views.Home) is factory.create(Views.Home)
        assert len(sources.created) == 1
        assert len(factory) == 1

    def test_distinct_owners_distinct_instances(self) -> None:
        factory, _ = make_factory()
        assert factory.create(Views.Home) is not factory.create(Views.About)
        assert len(factory) == 2

    def test_string_owner(self) -> None:
        factory, _ = make_factory()
        localizer = factory.create(BASE_NAME)
        assert localizer.base_name == BASE_NAME
        assert factory.cached_base_names == (BASE_NAME,)

    def test_registered_base_name(self) -> None:
        registry = BaseNameRegistry()
        registry.register(Views.Home, BASE_NAME)
        factory, _ = make_factory(base_names=registry)

        assert factory.create(Views.Home).base_name == BASE_NAME
        assert factory.create(Views.Home) is factory.create(BASE_NAME)
        assert factory.base_names is registry

    def test_localizer_reads_its_source(self) -> None:
        factory, _ = make_factory()
        with culture_scope("fr-FR"):
            assert factory.create(Views.Home)["Greeting"].value == "Bonjour"

    def test_source_receives_options(self) -> None:
        factory, sources = make_factory()
        factory.create(Views.Home)
        assert sources.parameters == [factory.options.source_args]

    def test_short_base_name_not_cached(self) -> None:
        factory, _ = make_factory()
        with pytest.raises(ConfigurationError):
            factory.create("Home")
        assert len(factory) == 0

    def test_narrowing_rule_from_options(self) -> None:
        sources = RecordListSourceFactory(ROWS)
        options = LocalizationOptions(separator="/", filter_segments=1)
        factory = LocalizerFactory(options, data_source_factory=sources)

        assert factory.create("Views/Home").base_name == "Views/Home"
        with pytest.raises(ConfigurationError):
            factory.create("Views.Home")

    def test_none_owner_rejected(self) -> None:
        factory, _ = make_factory()
        with pytest.raises(TypeError, match="owner must not be None"):
            factory.create(None)  # type: ignore[arg-type]


class TestCreateFromName:
    """Explicit (base_name, location) localizers."""

    def test_prefixed_base_name(self) -> None:
        factory, sources = make_factory()
        localizer = factory.create_from_name(
            "sqllocalization.Shared.Views.Layout", "sqllocalization"
        )
        assert localizer.base_name == "sqllocalizationShared.Views.Layout"
        assert sources.base_names == ["sqllocalizationShared.Views.Layout"]

    def test_cached_under_pair_key(self) -> None:
        factory, sources = make_factory()
        first = factory.create_from_name("Shared.Views.Layout", "sqllocalization")
        second = factory.create_from_name("Shared.Views.Layout", "sqllocalization")

        assert first is second
        assert len(sources.created) == 1
        assert factory.cached_base_names == ("B=Shared.Views.Layout,L=sqllocalization",)

    def test_pair_key_distinct_from_owner_key(self) -> None:
        factory, _ = make_factory()
        by_name = factory.create_from_name("Shared.Views.Layout", "sqllocalization")
        by_owner = factory.create("sqllocalizationShared.Views.Layout")
        assert by_name is not by_owner
        assert by_name.base_name == by_owner.base_name

    def test_unimportable_location(self) -> None:
        factory, sources = make_factory()
        with pytest.raises(ConfigurationError, match="no_such_application"):
            factory.create_from_name("Shared.Views.Layout", "no_such_application")
        assert len(factory) == 0
        assert sources.created == []

    def test_none_arguments_rejected(self) -> None:
        factory, _ = make_factory()
        with pytest.raises(TypeError, match="base_name"):
            factory.create_from_name(None, "sqllocalization")  # type: ignore[arg-type]
        with pytest.raises(TypeError, match="location"):
            factory.create_from_name("Shared.Views.Layout", None)  # type: ignore[arg-type]


class TestClearCache:
    def test_new_instances_after_clear(self, caplog: pytest.LogCaptureFixture) -> None:
        factory, sources = make_factory()
        before = factory.create(Views.Home)

        with caplog.at_level(logging.INFO, logger="sqllocalization.factory"):
            factory.clear_cache()

        assert len(factory) == 0
        assert "Localizer cache cleared (1 entries)" in caplog.text
        after = factory.create(Views.Home)
        assert after is not before
        assert len(sources.created) == 2

    def test_handed_out_localizers_keep_working(self) -> None:
        factory, _ = make_factory()
        localizer = factory.create(Views.Home)
        factory.clear_cache()
        with culture_scope("fr-FR"):
            assert localizer["Greeting"].value == "Bonjour"


class TestLoggers:
    def test_logger_factory_supplies_named_loggers(self) -> None:
        requested: list[str] = []

        def logger_factory(name: str) -> logging.Logger:
            requested.append(name)
            return logging.getLogger(name)

        sources = RecordListSourceFactory(ROWS)
        factory = LocalizerFactory(
            LocalizationOptions(), logger_factory, data_source_factory=sources
        )
        factory.create(Views.Home)

        assert StringLocalizer.__module__ in requested
        assert "tests.helpers.fakes" in requested
        assert sources.loggers[0] is logging.getLogger("tests.helpers.fakes")


class TestConstruction:
    def test_none_options_rejected(self) -> None:
        with pytest.raises(TypeError, match="options must not be None"):
            LocalizerFactory(None)  # type: ignore[arg-type]

    def test_none_logger_factory_rejected(self) -> None:
        with pytest.raises(TypeError, match="logger_factory must not be None"):
            LocalizerFactory(LocalizationOptions(), None)  # type: ignore[arg-type]

    def test_repr(self) -> None:
        factory, _ = make_factory()
        factory.create(Views.Home)
        assert repr(factory) == "LocalizerFactory(localizers=1)"


class TestConcurrency:
    """Racing first requests build exactly one localizer."""

    def test_concurrent_create_builds_once(self) -> None:
        factory, sources = make_factory()
        barrier = threading.Barrier(32)

        def create(_: int) -> StringLocalizer:
            barrier.wait()
            return factory.create(Views.Home)

        with ThreadPoolExecutor(max_workers=32) as executor:
            results = list(executor.map(create, range(32)))

        assert all(result is results[0] for result in results)
        assert len(sources.created) == 1

    def test_concurrent_mixed_keys(self) -> None:
        factory, sources = make_factory()
        owners = [Views.Home, Views.About, BASE_NAME, "Shop.Web.Views.Cart"]

        def create(index: int) -> StringLocalizer:
            return factory.create(owners[index % len(owners)])

        with ThreadPoolExecutor(max_workers=16) as executor:
            results = list(executor.map(create, range(200)))

        assert len(factory) == len(owners)
        assert len(sources.created) == len(owners)
        for index, result in enumerate(results):
            assert result is factory.create(owners[index % len(owners)])


class TestSqlIntegration:
    def test_default_data_source_is_sql(self, source_args: dict[str, str]) -> None:
        factory = LocalizerFactory(LocalizationOptions(source_args=source_args))
        localizer = factory.create(BASE_NAME)

        assert isinstance(localizer.data_source, SqlDataSource)
        with culture_scope("fr-CA"):
            assert localizer["Greeting"].value == "Allo"

    def test_missing_option_surfaces_at_create(self) -> None:
        factory = LocalizerFactory(LocalizationOptions())
        with pytest.raises(ConfigurationError, match="ConnectionString"):
            factory.create(BASE_NAME)
