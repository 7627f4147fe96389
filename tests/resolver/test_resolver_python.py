"""Resolution over live classes described by PythonIntrospector."""

from __future__ import annotations

import pytest

from annolens.config.models import ResolverConfig
from annolens.introspect.python import PythonIntrospector
from annolens.resolver.properties import property_name
from annolens.resolver.resolver import AnnotationResolver
from annolens_fixtures.deferred import DeferredChild
from annolens_fixtures.kinds import (
    Audited,
    Column,
    ReadOnlyQuery,
    Secured,
    Transactional,
    Validated,
)
from annolens_fixtures.plain import PlainAction, Standalone
from annolens_fixtures.webapp.actions import (
    AdminAction,
    Auditable,
    BaseAction,
    CrudAction,
    OrderAction,
    Plain,
)


@pytest.fixture
def introspector() -> PythonIntrospector:
    return PythonIntrospector()


@pytest.fixture
def resolver() -> AnnotationResolver:
    return AnnotationResolver()


class TestMethods:
    def test_override_inherits_from_base(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        save = introspector.method(CrudAction, "save")

        assert resolver.find_method_annotation(save, Transactional) == Transactional()

    def test_deep_override(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        save = introspector.method(OrderAction, "save")

        assert resolver.find_method_annotation(save, Transactional) == Transactional()

    def test_meta_annotation(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        list_all = introspector.method(CrudAction, "list_all")

        assert resolver.find_method_annotation(list_all, Transactional) == Transactional(
            read_only=True
        )

    def test_meta_annotation_is_not_transitive(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        search = introspector.method(CrudAction, "search")

        assert resolver.find_method_annotation(search, Transactional) is None
        assert resolver.find_method_annotation(search, ReadOnlyQuery) == ReadOnlyQuery("cached")

    def test_protocol_method(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        execute = introspector.method(CrudAction, "execute")

        assert resolver.find_method_annotation(execute, Audited) == Audited("interface")
        assert resolver.interface_cache.get(introspector.describe(Plain)) is False
        assert resolver.interface_cache.get(introspector.describe(Auditable)) is True

    def test_changed_signature_breaks_inheritance(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        save = introspector.method(AdminAction, "save")

        assert save.parameter_types == ("int",)
        assert resolver.find_method_annotation(save, Transactional) is None

    def test_name_only_matching(self, introspector: PythonIntrospector) -> None:
        resolver = AnnotationResolver(config=ResolverConfig(match_parameter_types=False))
        save = introspector.method(AdminAction, "save")

        assert resolver.find_method_annotation(save, Transactional) == Transactional()

    def test_static_method(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        build = introspector.method(OrderAction, "build")

        assert resolver.find_method_annotation(build, Audited) == Audited("static")

    def test_unannotated(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        run = introspector.method(Standalone, "run")

        assert resolver.find_method_annotation(run, Transactional) is None

    def test_override_across_hint_styles(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        attach = introspector.method(DeferredChild, "attach")
        rename = introspector.method(DeferredChild, "rename")

        assert resolver.find_method_annotation(attach, Transactional) == Transactional()
        assert resolver.find_method_annotation(rename, Audited) == Audited("rename")


class TestClasses:
    def test_class_annotation(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        admin = introspector.describe(AdminAction)

        assert resolver.find_class_annotation(admin, Secured) == Secured("admin")

    def test_package_annotation(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        order = introspector.describe(OrderAction)

        assert resolver.find_class_annotation(order, Secured) == Secured("package")

    def test_superclass_package(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        plain = introspector.describe(PlainAction)

        assert resolver.find_class_annotation(plain, Secured) == Secured("package")

    def test_nothing_found(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        assert resolver.find_class_annotation(introspector.describe(Standalone), Secured) is None


class TestCollections:
    def test_annotated_methods(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        found = resolver.get_annotated_methods(introspector.describe(OrderAction))

        assert found == {
            introspector.method(OrderAction, "build"),
            introspector.method(CrudAction, "list_all"),
            introspector.method(CrudAction, "search"),
            introspector.method(BaseAction, "save"),
            introspector.method(BaseAction, "validate"),
        }

    def test_annotated_methods_by_kind(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        found = resolver.get_annotated_methods(introspector.describe(OrderAction), Transactional)

        assert found == {
            introspector.method(OrderAction, "save"),
            introspector.method(CrudAction, "save"),
            introspector.method(CrudAction, "list_all"),
            introspector.method(BaseAction, "save"),
        }

    def test_fields(self, introspector: PythonIntrospector, resolver: AnnotationResolver) -> None:
        fields = resolver.collect_fields(Column, introspector.describe(OrderAction))

        # "broken" names an undefined type and is skipped
        assert [f.name for f in fields] == ["order_id", "registry", "created", "id"]

    def test_methods(self, introspector: PythonIntrospector, resolver: AnnotationResolver) -> None:
        methods = resolver.collect_methods(Validated, introspector.describe(OrderAction))

        assert methods == [introspector.method(BaseAction, "validate")]

    def test_interfaces(
        self, introspector: PythonIntrospector, resolver: AnnotationResolver
    ) -> None:
        interfaces = resolver.collect_interfaces(introspector.describe(OrderAction))

        assert interfaces == [introspector.describe(Plain), introspector.describe(Auditable)]


class TestPropertyNames:
    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("set_total", "total"),
            ("get_total", "total"),
            ("isPaid", "paid"),
            ("summary", None),
            ("save", None),
        ],
    )
    def test_accessors(
        self, introspector: PythonIntrospector, method: str, expected: str | None
    ) -> None:
        assert property_name(introspector.method(OrderAction, method)) == expected
