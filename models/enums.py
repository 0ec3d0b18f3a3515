from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]

    @classmethod
    def parse(cls, value):
        """Return the member for ``value`` or None when it is not recognized."""
        try:
            return cls(value)
        except ValueError:
            return None


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Job function assigned to a user. Primary key for default permissions."""

    super_admin = "super_admin"
    tenant_admin = "tenant_admin"
    director = "director"
    physician = "physician"
    nurse = "nurse"
    pharmacist = "pharmacist"
    lab_technician = "lab_technician"
    receptionist = "receptionist"
    billing_staff = "billing_staff"
    insurance_manager = "insurance_manager"
    patient = "patient"


# -----------------------------------------------------
# MODULE
# -----------------------------------------------------
class Module(BaseStrEnum):
    """Functional area of the application whose access is gated independently."""

    dashboard = "dashboard"
    patients = "patients"
    appointments = "appointments"
    prescriptions = "prescriptions"
    lab_orders = "lab_orders"
    lab_results = "lab_results"
    consultations = "consultations"
    vital_signs = "vital_signs"
    medical_history = "medical_history"
    patient_check_in = "patient_check_in"
    medications = "medications"
    billing = "billing"
    insurance_claims = "insurance_claims"
    service_prices = "service_prices"
    reports = "reports"
    users = "users"
    roles = "roles"
    tenant_settings = "tenant_settings"
    audit_logs = "audit_logs"
    communications = "communications"
    departments = "departments"
    staff_management = "staff_management"
    inventory = "inventory"
    settings = "settings"


# -----------------------------------------------------
# ACTION
# -----------------------------------------------------
class Action(BaseStrEnum):
    """
    Every action name used by any module.
    Which actions apply to a module is defined in core.permissions.MODULE_ACTIONS.
    """

    view = "view"
    create = "create"
    update = "update"
    edit = "edit"
    delete = "delete"
    export = "export"
    search = "search"
    cancel = "cancel"
    approve = "approve"
    assign = "assign"
    manage = "manage"
    generate = "generate"
    schedule = "schedule"
    record = "record"
    finalize = "finalize"
    assist = "assist"
    process = "process"
    dispense = "dispense"
    inventory = "inventory"
    submit = "submit"
    track = "track"
    modify = "modify"
    deactivate = "deactivate"
    reorder = "reorder"
    backup = "backup"
    restore = "restore"
    medical_records = "medical_records"
    basic_info = "basic_info"
    view_basic = "view_basic"
    view_billing = "view_billing"
    update_basic = "update_basic"
    update_status = "update_status"
    search_prescriptions = "search_prescriptions"
    search_lab = "search_lab"
    enter_results = "enter_results"
    approve_results = "approve_results"
    process_payments = "process_payments"
    medication_claims = "medication_claims"
    generate_financial = "generate_financial"
    create_staff = "create_staff"
    assign_staff = "assign_staff"
    assign_roles = "assign_roles"
    manage_permissions = "manage_permissions"
    refresh_data = "refresh_data"
    view_metrics = "view_metrics"
    view_clinical = "view_clinical"
    view_patient_care = "view_patient_care"
    view_pharmacy = "view_pharmacy"
    view_lab = "view_lab"
    view_front_desk = "view_front_desk"
    view_admin = "view_admin"

