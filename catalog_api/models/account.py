from datetime import datetime, timezone
from catalog_api.extensions import db

# Largest value a Numeric(14, 2) balance column holds.
MAX_BALANCE = 999_999_999_999.99


class Account(db.Model):
    __tablename__ = "accounts"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    balance = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        db.CheckConstraint("balance >= 0", name="ck_account_balance_non_negative"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "balance": float(self.balance) if self.balance is not None else 0.0,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Account {self.name}: {self.balance}>"
