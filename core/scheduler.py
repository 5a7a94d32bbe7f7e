"""Role catalog lookup, role selection and execution planning."""

from config.defaults import DEFAULTS
from config.roles import CLOSING_ROLES, FOUNDATIONAL_ROLES, ROLE_CATALOG
from core.errors import ConfigurationError
from core.state import ExecutionPlan, Role

_ROLES_BY_ID = {entry["id"]: Role(**entry) for entry in ROLE_CATALOG}


def get_role(role_id) -> Role:
    """Look a role up by id. An unknown id means the catalog is broken."""
    role = _ROLES_BY_ID.get(role_id)
    if role is None:
        raise ConfigurationError(f"Role '{role_id}' is not in the role catalog")
    return role


def all_roles():
    return list(_ROLES_BY_ID.values())


def _conditional_role_ids(record):
    """Roles requested by the record's features and app type, in rule order."""
    ids = []
    features = record.features

    if "api" in features or record.database:
        ids.append("backend")
    if record.authentication or "auth" in features:
        ids.append("security")
    if "seo" in features or record.app_type == "landing-page":
        ids.extend(["seo", "performance"])
    if record.target == "mobile" or "responsive" in features:
        ids.append("mobile")
    if "payment" in features or record.app_type == "e-commerce":
        ids.extend(["security", "backend"])
    return ids


def select_roles(record):
    """Pick the roles for a record, de-duplicated and sorted by priority."""
    wanted = list(FOUNDATIONAL_ROLES) + _conditional_role_ids(record) + list(CLOSING_ROLES)

    seen = set()
    roles = []
    for role_id in wanted:
        if role_id in seen:
            continue
        seen.add(role_id)
        roles.append(get_role(role_id))

    # sorted() is stable: equal priorities keep selection order
    return sorted(roles, key=lambda r: r.priority)


def create_plan(record) -> ExecutionPlan:
    roles = select_roles(record)
    mode = "sequential" if record.complexity == "complex" else "parallel"

    if mode == "parallel":
        estimate = DEFAULTS["parallel_estimate_seconds"]
    else:
        estimate = DEFAULTS["sequential_seconds_per_role"] * len(roles)

    return ExecutionPlan(roles=roles, mode=mode, estimated_duration_seconds=estimate)
