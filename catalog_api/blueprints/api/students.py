"""Student records endpoints."""
from flask import request

from catalog_api.blueprints.api import api_bp
from catalog_api.blueprints.api.envelope import json_body, ok, ok_list, ok_page
from catalog_api.services import student_service


@api_bp.route("/students", methods=["POST"])
def create_student():
    student = student_service.create_student(json_body(request))
    return ok(student.to_dict(), "Student created successfully", status=201)


@api_bp.route("/students", methods=["GET"])
def list_students():
    filters = {
        "course": request.args.get("course"),
        "isActive": request.args.get("isActive"),
    }
    result = student_service.list_students(
        filters,
        page=request.args.get("page"),
        limit=request.args.get("limit"),
    )
    return ok_page(result)


@api_bp.route("/students/stats")
def student_statistics():
    return ok(student_service.get_student_statistics())


@api_bp.route("/students/course/<course>")
def students_by_course(course):
    return ok_list(student_service.get_students_by_course(course), course=course)


@api_bp.route("/students/<student_id>", methods=["GET"])
def get_student(student_id):
    return ok(student_service.get_student(student_id).to_dict())


@api_bp.route("/students/<student_id>", methods=["PUT"])
def update_student(student_id):
    student = student_service.update_student(student_id, json_body(request))
    return ok(student.to_dict(), "Student updated successfully")


@api_bp.route("/students/<student_id>", methods=["DELETE"])
def delete_student(student_id):
    student = student_service.soft_delete_student(student_id)
    return ok(student.to_dict(), "Student deleted successfully")
