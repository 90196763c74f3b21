# backend/models/utilizador.py

from __future__ import annotations
import typing as t
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from .database import db


class Utilizador(db.Model):
    """Conta do sistema legado (tabela de utilizadores anterior à migração de autenticação)."""
    __tablename__ = 'utilizadores'

    id: Mapped[int] = mapped_column(primary_key=True)
    nome: Mapped[str] = mapped_column(db.String(120), nullable=False)
    user: Mapped[str] = mapped_column(db.String(45), unique=True, nullable=False)
    email: Mapped[t.Optional[str]] = mapped_column(db.String(120), unique=True)
    estado_actual: Mapped[str] = mapped_column(db.String(20), default='Activo', server_default='Activo')
    data_cadastro: Mapped[datetime] = mapped_column(default=lambda: datetime.now(timezone.utc))

    def __init__(self, nome: str, user: str, **kw: t.Any) -> None:
        super().__init__(nome=nome, user=user, **kw)

    def __repr__(self):
        return f'<Utilizador {self.user}>'
