# core/permissions.py

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from models.enums import Action, Module, Role

# module -> granted actions
PermissionSet = Mapping[str, FrozenSet[str]]


# ============================================
# MODULE → ACTION VOCABULARY
# ============================================
MODULE_ACTIONS = {
    Module.dashboard: [
        Action.view, Action.refresh_data,
        Action.view_metrics, Action.view_clinical, Action.view_patient_care,
        Action.view_pharmacy, Action.view_lab, Action.view_front_desk,
        Action.view_billing, Action.view_admin,
    ],
    Module.patients: [
        Action.view, Action.create, Action.update, Action.edit, Action.delete,
        Action.export, Action.search, Action.medical_records, Action.basic_info,
        Action.view_basic, Action.view_billing, Action.update_basic,
        Action.search_prescriptions, Action.search_lab,
    ],
    Module.appointments: [
        Action.view, Action.create, Action.update, Action.edit, Action.delete,
        Action.cancel, Action.update_status,
    ],
    Module.prescriptions: [
        Action.view, Action.create, Action.update, Action.edit, Action.delete,
        Action.cancel, Action.approve, Action.dispense, Action.update_status,
    ],
    Module.lab_orders: [
        Action.view, Action.create, Action.update, Action.edit, Action.delete,
        Action.assign, Action.process, Action.enter_results, Action.approve_results,
    ],
    Module.lab_results: [Action.view, Action.create, Action.update],
    Module.consultations: [
        Action.view, Action.create, Action.update, Action.finalize, Action.assist,
    ],
    Module.vital_signs: [Action.view, Action.record],
    Module.medical_history: [Action.view, Action.edit],
    Module.patient_check_in: [Action.manage],
    Module.medications: [Action.manage, Action.inventory],
    Module.billing: [
        Action.view, Action.create, Action.update, Action.edit, Action.delete,
        Action.manage, Action.process, Action.process_payments,
        Action.medication_claims, Action.export,
    ],
    Module.insurance_claims: [Action.view, Action.create, Action.submit, Action.track],
    Module.service_prices: [Action.view, Action.manage],
    Module.reports: [
        Action.view, Action.create, Action.generate, Action.generate_financial,
        Action.export, Action.schedule,
    ],
    Module.users: [
        Action.view, Action.create, Action.update, Action.deactivate, Action.create_staff,
    ],
    Module.roles: [Action.assign, Action.modify],
    Module.tenant_settings: [Action.view, Action.update],
    Module.audit_logs: [Action.view, Action.export],
    Module.communications: [Action.view, Action.create],
    Module.departments: [
        Action.view, Action.create, Action.edit, Action.delete, Action.assign_staff,
    ],
    Module.staff_management: [
        Action.view, Action.create, Action.edit, Action.delete,
        Action.assign_roles, Action.manage_permissions,
    ],
    Module.inventory: [
        Action.view, Action.create, Action.edit, Action.delete, Action.reorder, Action.export,
    ],
    Module.settings: [Action.view, Action.edit, Action.backup, Action.restore],
}


# ============================================
# CENTRALIZED ROLE → MODULE → ACTIONS MAP
# super_admin is resolved separately (maximal set).
# insurance_manager and patient have no defaults.
# ============================================
DEFAULT_ROLE_PERMISSIONS = {

    # =====================================================
    # DIRECTOR: executive oversight, limited patient data
    # =====================================================
    Role.director: {
        Module.patients: [Action.view, Action.search],
        Module.appointments: [Action.view, Action.create, Action.update, Action.cancel],
        Module.prescriptions: [Action.view],
        Module.lab_orders: [Action.view],
        Module.billing: [Action.view, Action.manage],
        Module.reports: [Action.view, Action.generate],
        Module.users: [Action.view, Action.create_staff],
        Module.audit_logs: [Action.view],
        Module.dashboard: [Action.view_metrics],
    },

    # =====================================================
    # PHYSICIAN: full clinical access
    # =====================================================
    Role.physician: {
        Module.patients: [
            Action.view, Action.create, Action.update, Action.search, Action.medical_records,
        ],
        Module.appointments: [Action.view, Action.create, Action.update, Action.cancel],
        Module.prescriptions: [Action.view, Action.create, Action.update, Action.cancel],
        Module.lab_orders: [Action.view, Action.create, Action.update, Action.assign],
        Module.consultations: [Action.view, Action.create, Action.update, Action.finalize],
        Module.vital_signs: [Action.view, Action.record],
        Module.medical_history: [Action.view, Action.edit],
        Module.billing: [Action.view],
        Module.reports: [Action.view],
        Module.communications: [Action.view, Action.create],
        Module.dashboard: [Action.view_clinical],
    },

    # =====================================================
    # NURSE: patient care, cannot prescribe
    # =====================================================
    Role.nurse: {
        Module.patients: [Action.view, Action.search, Action.basic_info],
        Module.appointments: [Action.view, Action.update_status],
        Module.prescriptions: [Action.view],
        Module.lab_orders: [Action.view],
        Module.consultations: [Action.view, Action.assist],
        Module.vital_signs: [Action.view, Action.record],
        Module.medical_history: [Action.view],
        Module.patient_check_in: [Action.manage],
        Module.communications: [Action.view],
        Module.dashboard: [Action.view_patient_care],
    },

    # =====================================================
    # PHARMACIST
    # =====================================================
    Role.pharmacist: {
        Module.patients: [Action.view_basic, Action.search_prescriptions],
        Module.prescriptions: [Action.view, Action.dispense, Action.update_status],
        Module.medications: [Action.manage, Action.inventory],
        Module.billing: [Action.medication_claims],
        Module.communications: [Action.view, Action.create],
        Module.dashboard: [Action.view_pharmacy],
    },

    # =====================================================
    # LAB TECHNICIAN
    # =====================================================
    Role.lab_technician: {
        Module.patients: [Action.view_basic, Action.search_lab],
        Module.lab_orders: [Action.view, Action.process, Action.enter_results],
        Module.lab_results: [Action.create, Action.update, Action.view],
        Module.dashboard: [Action.view_lab],
    },

    # =====================================================
    # RECEPTIONIST: front desk, minimal clinical data
    # =====================================================
    Role.receptionist: {
        Module.patients: [Action.view, Action.create, Action.update_basic, Action.search],
        Module.appointments: [Action.view, Action.create, Action.update, Action.cancel],
        Module.patient_check_in: [Action.manage],
        Module.vital_signs: [Action.record],
        Module.billing: [Action.view, Action.process_payments],
        Module.service_prices: [Action.view, Action.manage],
        Module.dashboard: [Action.view_front_desk],
    },

    # =====================================================
    # BILLING STAFF: no clinical data
    # =====================================================
    Role.billing_staff: {
        Module.patients: [Action.view_billing, Action.search],
        Module.appointments: [Action.view],
        Module.billing: [Action.view, Action.create, Action.update, Action.process],
        Module.insurance_claims: [Action.view, Action.create, Action.submit, Action.track],
        Module.service_prices: [Action.view, Action.manage],
        Module.reports: [Action.view, Action.generate_financial],
        Module.dashboard: [Action.view_billing],
    },

    # =====================================================
    # TENANT ADMIN: organization administration
    # =====================================================
    Role.tenant_admin: {
        Module.patients: [Action.view, Action.search],
        Module.appointments: [Action.view],
        Module.users: [Action.view, Action.create, Action.update, Action.deactivate],
        Module.roles: [Action.assign, Action.modify],
        Module.tenant_settings: [Action.view, Action.update],
        Module.audit_logs: [Action.view],
        Module.reports: [Action.view, Action.generate],
        Module.billing: [Action.view, Action.manage],
        Module.service_prices: [Action.view, Action.manage],
        Module.dashboard: [Action.view_admin],
    },
}


# ============================================
# Immutable configuration
# ============================================
def freeze_permission_set(raw: Mapping) -> PermissionSet:
    """Copy a module -> actions mapping into a read-only mapping of frozensets."""
    return MappingProxyType({
        str(module): frozenset(str(action) for action in actions)
        for module, actions in raw.items()
    })


@dataclass(frozen=True)
class PermissionConfig:
    """
    Everything the resolver needs besides the tenant overrides.
    Built once at startup and injected, never mutated.
    """

    module_actions: PermissionSet
    defaults: Mapping[str, PermissionSet]
    super_admin: PermissionSet

    def default_for(self, role: str) -> Optional[PermissionSet]:
        return self.defaults.get(role)


def _validate_defaults(module_actions: PermissionSet, defaults: Mapping[str, PermissionSet]):
    for role, permission_set in defaults.items():
        if Role.parse(role) is None:
            raise ValueError(f"Default permissions defined for unknown role '{role}'")
        for module, actions in permission_set.items():
            vocabulary = module_actions.get(module)
            if vocabulary is None:
                raise ValueError(f"Role '{role}' references unknown module '{module}'")
            unknown = actions - vocabulary
            if unknown:
                raise ValueError(
                    f"Role '{role}' grants actions outside the '{module}' vocabulary: "
                    f"{sorted(unknown)}"
                )


def build_permission_config(
    module_actions: Optional[Mapping] = None,
    defaults: Optional[Mapping] = None,
) -> PermissionConfig:
    """
    Build the immutable permission configuration.

    The super-admin set is every module with its full vocabulary.
    Raises ValueError if a default grants something outside the vocabulary,
    so a bad table fails at startup rather than at request time.
    """
    frozen_actions = freeze_permission_set(module_actions if module_actions is not None else MODULE_ACTIONS)

    missing = [m.value for m in Module if m.value not in frozen_actions]
    if module_actions is None and missing:
        raise ValueError(f"Modules without an action vocabulary: {missing}")

    frozen_defaults = MappingProxyType({
        str(role): freeze_permission_set(table)
        for role, table in (defaults if defaults is not None else DEFAULT_ROLE_PERMISSIONS).items()
    })
    _validate_defaults(frozen_actions, frozen_defaults)

    return PermissionConfig(
        module_actions=frozen_actions,
        defaults=frozen_defaults,
        super_admin=frozen_actions,
    )


@lru_cache(maxsize=1)
def get_permission_config() -> PermissionConfig:
    """Process-wide configuration, built on first use."""
    return build_permission_config()


# ============================================
# Read-only helpers
# ============================================
def default_permissions_for(role: str, config: Optional[PermissionConfig] = None) -> Dict[str, FrozenSet[str]]:
    config = config or get_permission_config()
    return dict(config.default_for(role) or {})


def allowed_actions(module: str, config: Optional[PermissionConfig] = None) -> FrozenSet[str]:
    config = config or get_permission_config()
    return config.module_actions.get(str(module), frozenset())


def serialize_permission_set(permissions: PermissionSet) -> Dict[str, list]:
    """JSON-friendly form: module -> sorted list of actions."""
    return {module: sorted(actions) for module, actions in sorted(permissions.items())}


def unknown_actions(module: str, actions: Iterable[str], config: Optional[PermissionConfig] = None) -> list:
    vocabulary = allowed_actions(module, config)
    return sorted({a for a in actions if a not in vocabulary})
