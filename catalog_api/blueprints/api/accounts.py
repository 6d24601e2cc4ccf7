"""Account and transfer endpoints."""
from flask import request

from catalog_api.blueprints.api import api_bp
from catalog_api.blueprints.api.envelope import json_body, ok, ok_page
from catalog_api.services import account_service


@api_bp.route("/accounts", methods=["POST"])
def create_account():
    account = account_service.create_account(json_body(request))
    return ok(account.to_dict(), "Account created", status=201)


@api_bp.route("/accounts", methods=["GET"])
def list_accounts():
    result = account_service.list_accounts(
        page=request.args.get("page"),
        limit=request.args.get("limit"),
    )
    return ok_page(result)


@api_bp.route("/accounts/transfer", methods=["POST"])
def transfer():
    sender, receiver = account_service.transfer(json_body(request))
    return ok(
        {"sender": sender.to_dict(), "receiver": receiver.to_dict()},
        "Transfer successful",
    )


@api_bp.route("/accounts/<account_id>", methods=["GET"])
def get_account(account_id):
    return ok(account_service.get_account(account_id).to_dict())


@api_bp.route("/accounts/<account_id>/deposit", methods=["POST"])
def deposit(account_id):
    account = account_service.deposit(account_id, json_body(request))
    return ok(account.to_dict(), "Deposit successful")


@api_bp.route("/accounts/<account_id>/withdraw", methods=["POST"])
def withdraw(account_id):
    account = account_service.withdraw(account_id, json_body(request))
    return ok(account.to_dict(), "Withdrawal successful")
