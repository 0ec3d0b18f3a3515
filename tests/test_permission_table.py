# tests/test_permission_table.py

"""
Tests for the compiled-in permission table and its configuration.
"""

from dataclasses import FrozenInstanceError

import pytest

from core.permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    MODULE_ACTIONS,
    build_permission_config,
    default_permissions_for,
    get_permission_config,
    serialize_permission_set,
    unknown_actions,
)
from models.enums import Module, Role


def test_every_module_has_a_vocabulary():
    assert set(MODULE_ACTIONS) == set(Module)
    for module, actions in MODULE_ACTIONS.items():
        assert actions, f"{module} has no actions"


def test_defaults_cover_every_staff_role():
    without_defaults = {Role.super_admin, Role.insurance_manager, Role.patient}
    assert set(DEFAULT_ROLE_PERMISSIONS) == set(Role) - without_defaults


def test_default_actions_stay_within_module_vocabulary():
    config = get_permission_config()
    for role, table in config.defaults.items():
        for module, actions in table.items():
            assert actions <= config.module_actions[module], (role, module)


def test_super_admin_set_is_every_module_with_full_vocabulary():
    config = get_permission_config()

    assert set(config.super_admin) == {m.value for m in Module}
    for module, actions in MODULE_ACTIONS.items():
        assert config.super_admin[module.value] == frozenset(a.value for a in actions)


def test_config_is_built_once():
    assert get_permission_config() is get_permission_config()


def test_config_is_immutable():
    config = get_permission_config()

    with pytest.raises(TypeError):
        config.defaults["physician"] = {}
    with pytest.raises(TypeError):
        config.defaults["physician"]["patients"] = frozenset()
    with pytest.raises(TypeError):
        config.super_admin["patients"] = frozenset()
    with pytest.raises(AttributeError):
        config.defaults["physician"]["patients"].add("delete")
    with pytest.raises(FrozenInstanceError):
        config.defaults = {}


def test_config_keys_are_plain_strings():
    config = get_permission_config()
    physician = config.defaults["physician"]

    assert all(type(module) is str for module in physician)
    assert all(type(a) is str for actions in physician.values() for a in actions)


def test_build_rejects_action_outside_vocabulary():
    with pytest.raises(ValueError, match="vocabulary"):
        build_permission_config(
            module_actions={"patients": ["view"]},
            defaults={"nurse": {"patients": ["view", "delete"]}},
        )


def test_build_rejects_unknown_module():
    with pytest.raises(ValueError, match="unknown module"):
        build_permission_config(
            module_actions={"patients": ["view"]},
            defaults={"nurse": {"billing": ["view"]}},
        )


def test_build_rejects_unknown_role():
    with pytest.raises(ValueError, match="unknown role"):
        build_permission_config(
            module_actions={"patients": ["view"]},
            defaults={"janitor": {"patients": ["view"]}},
        )


def test_build_honours_empty_injected_vocabulary():
    config = build_permission_config(module_actions={}, defaults={})

    assert dict(config.module_actions) == {}
    assert dict(config.super_admin) == {}


def test_build_does_not_alias_source_tables():
    source = {"nurse": {"patients": ["view"]}}
    config = build_permission_config(module_actions={"patients": ["view", "search"]}, defaults=source)

    source["nurse"]["patients"].append("search")

    assert config.defaults["nurse"]["patients"] == frozenset({"view"})


def test_default_permissions_for():
    physician = default_permissions_for("physician")

    assert physician["prescriptions"] == frozenset({"view", "create", "update", "cancel"})
    assert default_permissions_for("patient") == {}
    assert default_permissions_for("janitor") == {}


def test_serialize_permission_set_sorts_output():
    serialized = serialize_permission_set({
        "vital_signs": frozenset({"record", "view"}),
        "appointments": frozenset({"view"}),
    })

    assert list(serialized) == ["appointments", "vital_signs"]
    assert serialized["vital_signs"] == ["record", "view"]


def test_unknown_actions():
    assert unknown_actions("patients", ["view", "create"]) == []
    assert unknown_actions("patients", ["fly", "view", "teleport"]) == ["fly", "teleport"]
    assert unknown_actions("not_a_module", ["view"]) == ["view"]
