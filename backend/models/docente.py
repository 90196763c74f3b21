# backend/models/docente.py
from __future__ import annotations
import typing as t
from .database import db
from sqlalchemy.orm import Mapped, mapped_column, relationship

if t.TYPE_CHECKING:
    from .academico import Curso, Disciplina
    from .utilizador import Utilizador


class Especialidade(db.Model):
    __tablename__ = 'especialidades'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(100), unique=True, nullable=False)

    docentes: Mapped[list["Docente"]] = relationship(back_populates="especialidade")

    def __repr__(self):
        return f"<Especialidade id={self.id} designacao='{self.designacao}'>"


class Docente(db.Model):
    __tablename__ = 'docentes'

    id: Mapped[int] = mapped_column(primary_key=True)
    nome: Mapped[str] = mapped_column(db.String(120), nullable=False)
    email: Mapped[t.Optional[str]] = mapped_column(db.String(120))
    telefone: Mapped[t.Optional[str]] = mapped_column(db.String(20))
    status: Mapped[int] = mapped_column(default=1, server_default='1')

    especialidade_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('especialidades.id'), index=True)
    # Conta de acesso no sistema legado, quando o docente tem uma
    utilizador_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('utilizadores.id'), index=True)

    especialidade: Mapped[t.Optional["Especialidade"]] = relationship(back_populates="docentes")
    utilizador: Mapped[t.Optional["Utilizador"]] = relationship()

    def __init__(self, nome: str, **kw: t.Any) -> None:
        super().__init__(nome=nome, **kw)

    def __repr__(self):
        return f"<Docente id={self.id} nome='{self.nome}'>"


class DisciplinaDocente(db.Model):
    __tablename__ = 'disciplinas_docente'

    id: Mapped[int] = mapped_column(primary_key=True)
    docente_id: Mapped[int] = mapped_column(db.ForeignKey('docentes.id'), nullable=False, index=True)
    curso_id: Mapped[int] = mapped_column(db.ForeignKey('cursos.id'), nullable=False, index=True)
    disciplina_id: Mapped[int] = mapped_column(db.ForeignKey('disciplinas.id'), nullable=False, index=True)

    docente: Mapped["Docente"] = relationship()
    curso: Mapped["Curso"] = relationship()
    disciplina: Mapped["Disciplina"] = relationship()

    def __repr__(self):
        return (f"<DisciplinaDocente docente_id={self.docente_id} "
                f"curso_id={self.curso_id} disciplina_id={self.disciplina_id}>")
