import logging

from catalog_api.errors import NotFound, ValidationError
from catalog_api.extensions import db, persistence_errors
from catalog_api.models.student import Student
from catalog_api.schemas import StudentCreate, StudentDocument, validate
from catalog_api.services.common import page_args, page_result, parse_bool, parse_id

logger = logging.getLogger(__name__)


def _newest_first(query):
    return query.order_by(Student.created_at.desc(), Student.id.desc())


@persistence_errors()
def create_student(payload):
    data = validate(StudentCreate, payload, "Error creating student")
    student = Student(
        name=data.name,
        age=data.age,
        course=data.course,
        email=data.email,
    )
    db.session.add(student)
    db.session.commit()
    logger.info("Created student %s", student.id)
    return student


@persistence_errors()
def list_students(filters=None, page=None, limit=None):
    """All students, newest first; ``course`` and ``isActive`` narrow the list."""
    filters = filters or {}
    query = Student.query

    course = filters.get("course")
    if course:
        query = query.filter(Student.course == course)
    is_active = parse_bool(filters.get("isActive"))
    if is_active is not None:
        query = query.filter(Student.is_active.is_(is_active))

    page, limit = page_args(page, limit)
    pagination = _newest_first(query).paginate(
        page=page, per_page=limit, error_out=False
    )
    return page_result(pagination)


@persistence_errors()
def get_student(student_id):
    ident = parse_id(student_id, "student ID")
    student = db.session.get(Student, ident)
    if student is None:
        raise NotFound("Student not found")
    return student


@persistence_errors()
def get_students_by_course(course):
    query = Student.query.filter(
        Student.course == course, Student.is_active.is_(True)
    )
    return _newest_first(query).all()


@persistence_errors()
def update_student(student_id, payload):
    student = get_student(student_id)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    merged = {
        "name": student.name,
        "age": student.age,
        "course": student.course,
        "email": student.email,
        "isActive": student.is_active,
        **payload,
    }
    data = validate(StudentDocument, merged, "Error updating student")

    student.name = data.name
    student.age = data.age
    student.course = data.course
    student.email = data.email
    student.is_active = data.is_active
    db.session.commit()
    logger.info("Updated student %s", student.id)
    return student


@persistence_errors()
def soft_delete_student(student_id):
    student = get_student(student_id)
    student.is_active = False
    db.session.commit()
    logger.info("Deactivated student %s", student.id)
    return student


@persistence_errors()
def get_student_statistics():
    active = Student.is_active.is_(True)
    total = Student.query.filter(active).count()

    count_col = db.func.count(Student.id)
    rows = (
        db.session.query(Student.course, count_col)
        .filter(active)
        .group_by(Student.course)
        .order_by(count_col.desc(), Student.course)
        .all()
    )
    average_age = db.session.query(db.func.avg(Student.age)).filter(active).scalar()

    return {
        "totalStudents": total,
        "courseDistribution": [
            {"course": course, "count": count} for course, count in rows
        ],
        "averageAge": round(float(average_age), 2) if average_age is not None else 0,
    }
