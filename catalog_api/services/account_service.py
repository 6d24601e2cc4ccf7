"""
Accounts and money movement.

Balances only change through single guarded ``UPDATE`` statements, so a
debit can never take a balance below zero even with concurrent callers,
and both legs of a transfer commit together or not at all.
"""
import logging
from datetime import datetime, timezone

from catalog_api.errors import InsufficientFunds, InvalidArgument, NotFound, ValidationError
from catalog_api.extensions import db, persistence_errors
from catalog_api.models.account import MAX_BALANCE, Account
from catalog_api.schemas import AccountCreate, AmountRequest, TransferRequest, validate
from catalog_api.services.common import page_args, page_result, parse_id, to_money

logger = logging.getLogger(__name__)


def _amount(value, message):
    amount = to_money(value)
    if amount <= 0:
        raise ValidationError(
            message,
            errors=[{"field": "amount", "message": "Amount must be at least 0.01"}],
        )
    return amount


def _credit(account_id, amount):
    """Credit only if the balance stays within the column range; returns rows changed."""
    stmt = (
        db.update(Account)
        .where(
            Account.id == account_id,
            Account.balance <= to_money(MAX_BALANCE) - amount,
        )
        .values(
            balance=Account.balance + amount,
            updated_at=datetime.now(timezone.utc),
        )
        .execution_options(synchronize_session=False)
    )
    return db.session.execute(stmt).rowcount


def _debit(account_id, amount):
    """Debit only if the balance covers ``amount``; returns rows changed."""
    stmt = (
        db.update(Account)
        .where(Account.id == account_id, Account.balance >= amount)
        .values(
            balance=Account.balance - amount,
            updated_at=datetime.now(timezone.utc),
        )
        .execution_options(synchronize_session=False)
    )
    return db.session.execute(stmt).rowcount


@persistence_errors()
def create_account(payload):
    data = validate(AccountCreate, payload, "Error creating account")
    account = Account(name=data.name, balance=to_money(data.balance))
    db.session.add(account)
    db.session.commit()
    logger.info("Created account %s", account.name)
    return account


@persistence_errors()
def list_accounts(page=None, limit=None):
    page, limit = page_args(page, limit)
    pagination = Account.query.order_by(Account.id).paginate(
        page=page, per_page=limit, error_out=False
    )
    return page_result(pagination)


@persistence_errors()
def get_account(account_id):
    ident = parse_id(account_id, "account ID")
    account = db.session.get(Account, ident)
    if account is None:
        raise NotFound("Account not found")
    return account


@persistence_errors()
def deposit(account_id, payload):
    account = get_account(account_id)
    data = validate(AmountRequest, payload, "Invalid deposit amount")
    amount = _amount(data.amount, "Invalid deposit amount")

    if not _credit(account.id, amount):
        db.session.rollback()
        logger.warning("Deposit of %s into %s refused", amount, account.name)
        raise ValidationError(
            "Invalid deposit amount",
            errors=[{"field": "amount", "message": "Balance limit exceeded"}],
        )
    db.session.commit()
    db.session.refresh(account)
    logger.info("Deposited %s into account %s", amount, account.name)
    return account


@persistence_errors()
def withdraw(account_id, payload):
    account = get_account(account_id)
    data = validate(AmountRequest, payload, "Invalid withdraw amount")
    amount = _amount(data.amount, "Invalid withdraw amount")

    if not _debit(account.id, amount):
        db.session.rollback()
        logger.warning("Withdrawal of %s from %s refused", amount, account.name)
        raise InsufficientFunds("Insufficient funds")
    db.session.commit()
    db.session.refresh(account)
    logger.info("Withdrew %s from account %s", amount, account.name)
    return account


@persistence_errors()
def transfer(payload):
    """Move money between two accounts named in ``payload``.

    Returns ``(sender, receiver)`` with their new balances.
    """
    data = validate(TransferRequest, payload, "Error processing transfer")
    if data.sender == data.receiver:
        raise InvalidArgument("Sender and receiver must be different accounts")
    amount = _amount(data.amount, "Error processing transfer")

    sender = Account.query.filter_by(name=data.sender).first()
    receiver = Account.query.filter_by(name=data.receiver).first()
    if sender is None or receiver is None:
        raise NotFound("Sender or receiver not found")

    if not _debit(sender.id, amount):
        db.session.rollback()
        logger.warning(
            "Transfer of %s from %s to %s refused", amount, sender.name, receiver.name
        )
        raise InsufficientFunds("Insufficient balance")
    if _credit(receiver.id, amount) != 1:
        db.session.rollback()
        logger.warning(
            "Transfer of %s from %s to %s could not be credited",
            amount, sender.name, receiver.name,
        )
        raise ValidationError(
            "Error processing transfer",
            errors=[{"field": "amount", "message": "Receiver balance limit exceeded"}],
        )
    db.session.commit()

    db.session.refresh(sender)
    db.session.refresh(receiver)
    logger.info("Transferred %s from %s to %s", amount, sender.name, receiver.name)
    return sender, receiver
