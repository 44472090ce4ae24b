# --- sweetshop/model/user.py ---
from werkzeug.security import generate_password_hash, check_password_hash

from ..extensions import db
from ..utils.dates import utcnow, isoformat


class User(db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False, default="")
    full_name = db.Column(db.String(180), nullable=False)
    is_admin = db.Column(db.Boolean, nullable=False, default=False, index=True)
    is_super_admin = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @staticmethod
    def normalize_email(email) -> str:
        return (email or "").strip().lower()

    @classmethod
    def create(cls, email, password, full_name, is_admin=False, is_super_admin=False):
        """Build a new user with the password already hashed."""
        user = cls(
            email=cls.normalize_email(email),
            full_name=(full_name or "").strip(),
            is_admin=bool(is_admin or is_super_admin),
            is_super_admin=bool(is_super_admin),
        )
        user.set_password(password)
        return user

    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash or not password:
            return False
        return check_password_hash(self.password_hash, password)

    def as_api(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "is_admin": self.is_admin,
            "is_super_admin": self.is_super_admin,
            "created_at": isoformat(self.created_at),
        }
