"""Tests for core.scheduler and the role catalog."""

import pytest

from config.roles import ROLE_CATALOG
from core.errors import ConfigurationError
from core.scheduler import all_roles, create_plan, get_role, select_roles
from core.state import RequirementRecord


def _ids(roles):
    return [r.id for r in roles]


def test_catalog_ids_unique():
    ids = [entry["id"] for entry in ROLE_CATALOG]
    assert len(ids) == len(set(ids))
    assert len(all_roles()) == len(ids)


def test_get_role():
    role = get_role("designer")
    assert role.display_name == "UI/UX Designer"
    assert role.priority == 2


def test_get_role_unknown_is_configuration_error():
    with pytest.raises(ConfigurationError):
        get_role("astronaut")


def test_minimal_record_gets_foundational_and_closing_roles():
    roles = select_roles(RequirementRecord())
    assert _ids(roles) == ["architect", "designer", "developer", "tester", "accessibility", "documenter"]


def test_roles_sorted_by_priority():
    record = RequirementRecord(app_type="e-commerce", features={"payment", "responsive"})
    priorities = [r.priority for r in select_roles(record)]
    assert priorities == sorted(priorities)


def test_roles_deduplicated():
    # security and backend are requested twice (auth + payment)
    record = RequirementRecord(features={"auth", "payment", "api"}, authentication=True)
    ids = _ids(select_roles(record))
    assert ids.count("security") == 1
    assert ids.count("backend") == 1


def test_conditional_roles():
    record = RequirementRecord(app_type="landing-page", target="mobile")
    ids = _ids(select_roles(record))
    assert "seo" in ids
    assert "performance" in ids
    assert "mobile" in ids
    assert "backend" not in ids


def test_equal_priority_keeps_selection_order():
    record = RequirementRecord(database=True, target="mobile")
    ids = _ids(select_roles(record))
    # priority 3: developer (foundational) then backend then mobile
    assert ids.index("developer") < ids.index("backend") < ids.index("mobile")


def test_parallel_plan_for_simple_record():
    plan = create_plan(RequirementRecord(features={"seo"}))
    assert plan.mode == "parallel"
    assert plan.estimated_duration_seconds == 30


def test_sequential_plan_for_complex_record():
    features = {"auth", "payment", "crud", "search", "upload", "api"}
    plan = create_plan(RequirementRecord(features=features))
    assert plan.mode == "sequential"
    assert plan.estimated_duration_seconds == 10 * len(plan.roles)
