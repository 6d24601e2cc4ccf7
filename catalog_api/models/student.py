from datetime import datetime, timezone
from catalog_api.extensions import db


COURSES = (
    "Computer Science",
    "Mechanical Engineering",
    "Electrical Engineering",
    "Civil Engineering",
    "Business Administration",
    "Medicine",
    "Law",
    "Arts",
    "Other",
)


class Student(db.Model):
    __tablename__ = "students"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False, index=True)
    age = db.Column(db.Integer, nullable=False)
    course = db.Column(db.String(50), nullable=False, index=True)
    email = db.Column(db.String(255), unique=True)  # optional, unique when present
    enrollment_date = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @property
    def full_info(self):
        return f"{self.name} ({self.age} years old) - {self.course}"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "course": self.course,
            "email": self.email,
            "enrollmentDate": (
                self.enrollment_date.isoformat() if self.enrollment_date else None
            ),
            "isActive": self.is_active,
            "fullInfo": self.full_info,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Student {self.id}: {self.name}>"
