import pytest

from itemoptions.exceptions import UndefinedOptionKey
from itemoptions.options import DefinitionRegistry

DEFINITIONS = {
    "color": {"default": "red"},
    "tags": {"multiple": True},
    "size": {},
    "secret": {"requirement": lambda host: getattr(host, "admin", False)},
}


def test_definitions_are_built_once_per_host_class(make_host) -> None:
    host = make_host(DEFINITIONS)
    registry = type(host).option_definitions()

    assert isinstance(registry, DefinitionRegistry)
    assert type(host).option_definitions() is registry
    assert registry.keys() == ["color", "tags", "size", "secret"]


def test_registry_instance_is_used_as_is(make_host) -> None:
    registry = DefinitionRegistry(["only"])
    host = make_host(registry)

    assert type(host).option_definitions() is registry


def test_read_operations(make_host) -> None:
    host = make_host(DEFINITIONS, [("color", "blue"), ("tags", "a"), ("tags", "b")])

    assert host.has_option("color") is True
    assert host.has_option("size") is False
    assert host.has_options(["size", "tags"]) is True
    assert host.has_options(["size", "tags"], require_all=True) is False
    assert host.get_option("color").value == "blue"
    assert host.get_option_value("tags") == ["a", "b"]
    assert host.get_option_value("size", 3) == 3


def test_set_option_value_resets_the_index(make_host) -> None:
    host = make_host(DEFINITIONS, [("tags", "a")])
    assert host.get_option_value("tags") == ["a"]

    host.set_option_value("tags", ["a", "b"])
    assert host.get_option_value("tags") == ["a", "b"]

    host.set_option_value("color", "green")
    assert host.get_option_value("color") == "green"

    host.set_option_value("color", "red")
    assert host.has_option("color") is False
    assert host.get_option_value("color") == "red"


def test_set_option_values_merges_results(make_host) -> None:
    host = make_host(DEFINITIONS, [("size", 1)])

    result = host.set_option_values({"size": 2, "tags": ["x", "y"], "color": "red"})

    assert len(result.added) == 2
    assert len(result.updated) == 1
    assert host.get_option_value("size") == 2
    assert host.get_option_value("tags") == ["x", "y"]


def test_set_option_value_rejects_undefined_key(make_host) -> None:
    host = make_host(DEFINITIONS)

    with pytest.raises(UndefinedOptionKey):
        host.set_option_value("unknown", 1)


def test_get_option_create_if_absent_needs_no_explicit_reset(make_host) -> None:
    host = make_host(DEFINITIONS, [("color", "blue")])
    assert host.has_option("size") is False

    row = host.get_option("size", create_if_absent=True)
    row.value = 42

    assert host.has_option("size") is True
    assert host.get_option_value("size") == 42
    assert len(host.options) == 2


def test_direct_mutation_requires_reset(make_host) -> None:
    host = make_host(DEFINITIONS)
    assert host.has_option("size") is False

    row = type(host).new_option()
    row.key, row.value = "size", 5
    host.add_option(row)
    assert host.has_option("size") is False

    host.reset_options_index()
    assert host.get_option_value("size") == 5


def test_option_values_skips_ineligible_options(make_host) -> None:
    host = make_host(DEFINITIONS, [("size", 4)])

    assert host.option_values() == {"color": "red", "tags": [], "size": 4}

    admin = make_host(DEFINITIONS, admin=True)
    assert admin.option_values()["secret"] is None


def test_options_attribute_can_be_renamed(make_host) -> None:
    host = make_host({"size": {}}, [("size", 1)])
    host.settings_rows = host.options
    host.options = None
    host.options_attribute = "settings_rows"

    assert host.get_option_value("size") == 1


def test_list_default_is_not_shared_between_hosts(make_host) -> None:
    definitions = {"labels": {"default": ["x"]}}

    make_host(definitions).get_option_value("labels").append("leak")

    assert make_host(definitions).get_option_value("labels") == ["x"]
