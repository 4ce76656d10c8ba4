from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .auth.tokens import TokenService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.service import ClassService
from .core.constants import DEFAULT_TOKEN_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.service import LocationService
from .operators.service import OperatorService
from .parents.mysql_parent_repository import MySQLParentRepository
from .parents.service import ParentService
from .reports.service import ReportService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.service import ScheduleService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.service import SettingsService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.service import SubjectService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.service import TeacherService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    tokens: TokenService

    users_repo: Any
    students_repo: Any
    teachers_repo: Any
    parents_repo: Any
    classes_repo: Any
    subjects_repo: Any
    schedules_repo: Any
    attendance_repo: Any
    locations_repo: Any
    settings_repo: Any

    auth_service: AuthService
    student_service: StudentService
    teacher_service: TeacherService
    parent_service: ParentService
    operator_service: OperatorService
    class_service: ClassService
    subject_service: SubjectService
    schedule_service: ScheduleService
    location_service: LocationService
    settings_service: SettingsService
    attendance_service: AttendanceService
    report_service: ReportService


def assemble(
    *,
    tokens: TokenService,
    users,
    students,
    teachers,
    parents,
    classes,
    subjects,
    schedules,
    attendance,
    locations,
    settings,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL in production, fakes in tests)."""
    settings_service = SettingsService(settings)
    return Container(
        conn=conn,
        tokens=tokens,
        users_repo=users,
        students_repo=students,
        teachers_repo=teachers,
        parents_repo=parents,
        classes_repo=classes,
        subjects_repo=subjects,
        schedules_repo=schedules,
        attendance_repo=attendance,
        locations_repo=locations,
        settings_repo=settings,
        auth_service=AuthService(users, tokens, students=students, teachers=teachers),
        student_service=StudentService(students, users, classes),
        teacher_service=TeacherService(teachers, users, subjects),
        parent_service=ParentService(parents, users, students, attendance),
        operator_service=OperatorService(
            users,
            students=students,
            teachers=teachers,
            parents=parents,
            classes=classes,
            subjects=subjects,
            attendance=attendance,
        ),
        class_service=ClassService(classes, students, teachers),
        subject_service=SubjectService(subjects, schedules),
        schedule_service=ScheduleService(schedules, classes=classes, subjects=subjects, teachers=teachers),
        location_service=LocationService(locations),
        settings_service=settings_service,
        attendance_service=AttendanceService(
            attendance,
            students,
            schedules,
            locations,
            settings_service,
            teachers,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        report_service=ReportService(
            attendance, students=students, teachers=teachers, classes=classes, schedules=schedules
        ),
    )


def build_container(*, db_config: dict, jwt_secret: str, jwt_expires_hours: int = DEFAULT_TOKEN_HOURS) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 5)),
    )
    conn = DatabaseConnection(config)

    return assemble(
        conn=conn,
        tokens=TokenService(jwt_secret, expires_hours=jwt_expires_hours),
        users=MySQLUserRepository(conn),
        students=MySQLStudentRepository(conn),
        teachers=MySQLTeacherRepository(conn),
        parents=MySQLParentRepository(conn),
        classes=MySQLClassRepository(conn),
        subjects=MySQLSubjectRepository(conn),
        schedules=MySQLScheduleRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        locations=MySQLLocationRepository(conn),
        settings=MySQLSettingsRepository(conn),
    )
