"""Package imports — every module loads on the supported interpreters."""

import importlib
import pkgutil

import pytest

import cleancrud

MODULES = sorted(
    info.name
    for info in pkgutil.walk_packages(cleancrud.__path__, prefix="cleancrud.")
)


@pytest.mark.parametrize("name", MODULES)
def test_module_imports(name):
    importlib.import_module(name)


def test_app_exposes_routes():
    from cleancrud.main import app

    paths = {route.path for route in app.routes}
    assert "/api/v1/orders" in paths
    assert "/api/v1/users/{user_id}" in paths


async def test_generic_repository_list_on_empty_table(test_db):
    from cleancrud.infrastructure.repositories import SqlUserRepository

    assert await SqlUserRepository(test_db).list() == []
