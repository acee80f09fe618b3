from flask import current_app
from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash


class AdminUser(UserMixin):
    """The single studio admin, configured through ADMIN_EMAIL / ADMIN_PASSWORD."""

    def __init__(self, email, password_hash):
        self.id = email
        self.email = email
        self.password_hash = password_hash
        self.is_admin = True

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @classmethod
    def from_config(cls, config=None):
        config = config or current_app.config
        return cls(config["ADMIN_EMAIL"], generate_password_hash(config["ADMIN_PASSWORD"]))

    def __repr__(self):
        return f"<AdminUser {self.email}>"
