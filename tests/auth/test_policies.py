import pytest

from src.candi_qr.candi_qr.auth.policies import any_of, only, resolve_policy
from src.candi_qr.candi_qr.core.enums import Role
from src.candi_qr.candi_qr.core.exceptions import AuthorizationError


def test_only_policy_admits_role_and_admin():
    policy = only(Role.TEACHER)

    assert policy.allows(Role.TEACHER)
    assert policy.allows(Role.ADMIN)
    assert not policy.allows(Role.STUDENT)


def test_any_of_has_no_implicit_admin_bypass():
    policy = any_of(Role.TEACHER, Role.OPERATOR)

    assert policy.allows(Role.TEACHER)
    assert policy.allows(Role.OPERATOR)
    assert not policy.allows(Role.ADMIN)
    assert not policy.allows(Role.PARENT)


def test_rejection_message_names_allowed_roles():
    with pytest.raises(AuthorizationError) as exc:
        only(Role.TEACHER).check(Role.STUDENT)

    assert str(exc.value) == "Akses ditolak. Hanya guru atau admin yang dapat mengakses fitur ini"


@pytest.mark.parametrize(
    "method,path,allowed,denied",
    [
        ("GET", "/api/students", [Role.ADMIN, Role.TEACHER, Role.OPERATOR], [Role.STUDENT, Role.PARENT]),
        ("POST", "/api/students", [Role.ADMIN, Role.OPERATOR], [Role.TEACHER]),
        ("DELETE", "/api/classes/3", [Role.ADMIN], [Role.OPERATOR, Role.TEACHER]),
        ("PUT", "/api/attendance/5", [Role.TEACHER, Role.ADMIN], [Role.STUDENT, Role.OPERATOR]),
        ("POST", "/api/attendance/scan", [Role.STUDENT, Role.TEACHER], [Role.PARENT]),
        ("POST", "/api/yolo/attendance", [Role.STUDENT, Role.OPERATOR], [Role.PARENT]),
        ("GET", "/api/parents/children", [Role.PARENT, Role.ADMIN], [Role.OPERATOR]),
        ("GET", "/api/parents", [Role.ADMIN, Role.OPERATOR], [Role.PARENT]),
        ("GET", "/api/operators/school-data", [Role.OPERATOR, Role.ADMIN], [Role.TEACHER]),
        ("GET", "/api/operators", [Role.ADMIN], [Role.OPERATOR]),
        ("PUT", "/api/locations/1", [Role.ADMIN], [Role.OPERATOR]),
        ("POST", "/api/auth/register", [Role.ADMIN], [Role.OPERATOR]),
    ],
)
def test_route_table(method, path, allowed, denied):
    policy = resolve_policy(method, path)

    for role in allowed:
        assert policy.allows(role), role
    for role in denied:
        assert not policy.allows(role), role


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/api/attendance/history"),
        ("GET", "/api/yolo/locations"),
        ("GET", "/api/auth/profile"),
        ("PUT", "/api/auth/profile"),
    ],
)
def test_authenticated_only_routes(method, path):
    assert resolve_policy(method, path) is None


def test_prefix_matches_whole_segments():
    # /api/studentsX is not a students route
    assert resolve_policy("GET", "/api/studentsX") is None
