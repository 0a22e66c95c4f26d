"""Tests for domain name derivation.

Covers:
- The four derived name forms and their rules
- Purity / idempotence of derive()
- Class names, file paths and mount points built from one DomainSpecification
- validate_domain_name()
- require_path() between generated files
"""

from __future__ import annotations

import pytest

from screamgen.scaffolder.errors import SpecificationError
from screamgen.scaffolder.models import BACKEND_PROFILES, PersistenceBackend
from screamgen.scaffolder.naming import (
    SERVER_PATH,
    USE_CASE_ACTIONS,
    DomainSpecification,
    derive,
    require_path,
    validate_domain_name,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# derive
# ---------------------------------------------------------------------------


class TestDerive:
    def test_simple_name(self) -> None:
        domain = derive("orders")
        assert domain == DomainSpecification(
            raw_name="orders",
            capitalized_name="Orders",
            upper_name="ORDERS",
            camel_name="orders",
        )

    def test_only_first_character_changes(self) -> None:
        domain = derive("order-items")
        assert domain.capitalized_name == "Order-items"
        assert domain.upper_name == "ORDER-ITEMS"

    def test_camel_name_removes_hyphens(self) -> None:
        assert derive("order-items").camel_name == "orderItems"
        assert derive("a-b-c").camel_name == "aBC"

    def test_digits_after_hyphen(self) -> None:
        assert derive("v-2").camel_name == "v2"

    def test_plural_is_camel_plus_s(self) -> None:
        assert derive("order-item").plural_name == "orderItems"
        assert derive("users").plural_name == "userss"

    @pytest.mark.parametrize("raw", ["orders", "order-items", "x", "a1-b2"])
    def test_is_idempotent(self, raw: str) -> None:
        assert derive(raw) == derive(raw)
        assert derive(raw).as_context() == derive(raw).as_context()

    def test_is_frozen(self) -> None:
        domain = derive("orders")
        with pytest.raises(Exception):
            domain.raw_name = "users"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Identifiers and paths
# ---------------------------------------------------------------------------


class TestIdentifiers:
    def test_class_names(self) -> None:
        domain = derive("orders")
        assert domain.entity_class == "Orders"
        assert domain.port_class == "OrdersRepository"
        assert domain.memory_repository_class == "MemoryOrdersRepository"
        assert domain.controller_class == "OrdersController"
        assert domain.use_case_class("FindById") == "FindByIdOrdersUseCase"

    @pytest.mark.parametrize(
        "backend, expected",
        [
            (PersistenceBackend.MONGODB, "MongoOrdersRepository"),
            (PersistenceBackend.POSTGRESQL, "PostgresOrdersRepository"),
            (PersistenceBackend.MYSQL, "MysqlOrdersRepository"),
        ],
    )
    def test_backend_repository_class(
        self, backend: PersistenceBackend, expected: str
    ) -> None:
        assert derive("orders").backend_repository_class(BACKEND_PROFILES[backend]) == expected

    def test_event_type(self) -> None:
        assert derive("orders").event_type("Created") == "OrdersCreated"

    def test_mount_and_binding(self) -> None:
        domain = derive("order-items")
        assert domain.mount_path == "/api/order-items"
        assert domain.routes_binding == "orderItemsRoutes"

    def test_paths(self) -> None:
        domain = derive("orders")
        assert domain.entity_path == "src/orders/domain/entities/Orders.js"
        assert domain.port_path == "src/orders/application/ports/OrdersRepository.js"
        assert (
            domain.use_case_path("Create")
            == "src/orders/application/use-cases/CreateOrdersUseCase.js"
        )
        assert (
            domain.repository_path(domain.memory_repository_class)
            == "src/orders/infrastructure/repositories/MemoryOrdersRepository.js"
        )
        assert (
            domain.controller_path
            == "src/orders/infrastructure/controllers/OrdersController.js"
        )
        assert domain.routes_path == "src/orders/infrastructure/routes.js"
        assert domain.unit_test_path == "tests/orders/unit/Orders.test.js"
        assert (
            domain.integration_test_path
            == "tests/orders/integration/orders.routes.test.js"
        )

    def test_context_lists_every_use_case(self) -> None:
        ctx = derive("orders").as_context()
        assert [u["action"] for u in ctx["use_cases"]] == [a for a, _ in USE_CASE_ACTIONS]
        assert ctx["use_cases"][0]["class_name"] == "CreateOrdersUseCase"
        assert ctx["routes_path"] == "src/orders/infrastructure/routes.js"


# ---------------------------------------------------------------------------
# validate_domain_name
# ---------------------------------------------------------------------------


class TestValidateDomainName:
    @pytest.mark.parametrize("name", ["orders", "order-items", "a1"])
    def test_valid(self, name: str) -> None:
        assert validate_domain_name(name) == name

    @pytest.mark.parametrize("name", ["", "Orders", "1orders", "-orders", "or ders", "or_ders"])
    def test_invalid(self, name: str) -> None:
        with pytest.raises(SpecificationError):
            validate_domain_name(name)

    def test_error_is_also_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_domain_name("Bad")


# ---------------------------------------------------------------------------
# require_path
# ---------------------------------------------------------------------------


class TestRequirePath:
    def test_server_to_routes(self) -> None:
        routes = derive("orders").routes_path
        assert require_path(SERVER_PATH, routes) == "./orders/infrastructure/routes"

    def test_controller_to_use_case(self) -> None:
        domain = derive("orders")
        assert (
            require_path(domain.controller_path, domain.use_case_path("Create"))
            == "../../application/use-cases/CreateOrdersUseCase"
        )

    def test_sibling_directory(self) -> None:
        assert require_path("src/a/b.js", "src/a/c.js") == "./c"

    def test_to_config(self) -> None:
        assert require_path(SERVER_PATH, "config/database.js") == "../config/database"

    def test_non_js_target_keeps_extension(self) -> None:
        assert require_path("src/server.js", "src/data.json") == "./data.json"
