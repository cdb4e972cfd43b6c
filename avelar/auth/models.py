from datetime import datetime, timedelta

from werkzeug.security import check_password_hash, generate_password_hash

from .. import db

CARGOS = [
    ("admin", "Administrador"),
    ("gerente", "Gerente"),
    ("vendedor", "Vendedor"),
    ("optometrista", "Optometrista"),
    ("laboratorio", "Laboratório"),
    ("financeiro", "Financeiro"),
]


class User(db.Model):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, index=True, nullable=False)
    nome = db.Column(db.String(128), nullable=False)
    password_hash = db.Column(db.String(256))
    cargo = db.Column(db.String(30), default="vendedor")
    is_active_db = db.Column("is_active", db.Boolean, default=True, nullable=True)
    criado_em = db.Column(db.DateTime, default=datetime.utcnow)
    failed_login_count = db.Column(db.Integer, default=0)
    locked_until = db.Column(db.DateTime)
    last_password_change = db.Column(db.DateTime)

    def _validate_password_policy(self, password: str) -> None:
        """Regras de senha quando ENFORCE_PASSWORD_POLICY está ativo.

        - mínimo de PASSWORD_MIN_LENGTH caracteres
        - pelo menos um dígito e uma letra
        - não pode conter a parte local do email
        """
        from flask import current_app

        if not current_app.config.get("ENFORCE_PASSWORD_POLICY"):
            return
        min_len = current_app.config.get("PASSWORD_MIN_LENGTH", 8)
        if len(password) < min_len:
            raise ValueError("Senha curta demais")
        usuario = (self.email or "").split("@", 1)[0].lower()
        if usuario and usuario in password.lower():
            raise ValueError("Senha não pode conter o usuário")
        if not any(c.isdigit() for c in password):
            raise ValueError("Senha precisa de dígito")
        if not any(c.isalpha() for c in password):
            raise ValueError("Senha precisa de letra")

    def set_password(self, password: str) -> None:
        self._validate_password_policy(password)
        self.password_hash = generate_password_hash(password)
        self.last_password_change = datetime.utcnow()

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_active(self) -> bool:
        return True if self.is_active_db is None else bool(self.is_active_db)

    @is_active.setter
    def is_active(self, value: bool) -> None:
        self.is_active_db = bool(value)

    @property
    def cargo_label(self) -> str:
        return dict(CARGOS).get(self.cargo, self.cargo or "-")

    # --- Controle de tentativas de login ---
    def register_failed_login(self, max_attempts: int, lock_minutes: int) -> None:
        self.failed_login_count = (self.failed_login_count or 0) + 1
        if self.failed_login_count >= max_attempts:
            self.locked_until = datetime.utcnow() + timedelta(minutes=lock_minutes)
            self.failed_login_count = 0

    def reset_failed_login(self) -> None:
        self.failed_login_count = 0
        self.locked_until = None

    def __repr__(self):  # pragma: no cover
        return f"<User {self.email}>"
