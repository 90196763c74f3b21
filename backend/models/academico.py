# backend/models/academico.py
from __future__ import annotations
import typing as t
from .database import db
from sqlalchemy.orm import Mapped, mapped_column, relationship

if t.TYPE_CHECKING:
    from .turma import Turma


class AnoLectivo(db.Model):
    __tablename__ = 'anos_lectivos'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(45), unique=True, nullable=False)
    mes_inicial: Mapped[t.Optional[str]] = mapped_column(db.String(20))
    mes_final: Mapped[t.Optional[str]] = mapped_column(db.String(20))

    def __repr__(self):
        return f"<AnoLectivo id={self.id} designacao='{self.designacao}'>"


class Curso(db.Model):
    __tablename__ = 'cursos'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(100), unique=True, nullable=False)
    status: Mapped[int] = mapped_column(default=1, server_default='1')

    turmas: Mapped[list["Turma"]] = relationship(back_populates="curso")
    disciplinas: Mapped[list["Disciplina"]] = relationship(back_populates="curso")

    def __init__(self, designacao: str, **kw: t.Any) -> None:
        super().__init__(designacao=designacao, **kw)

    def __repr__(self):
        return f"<Curso id={self.id} designacao='{self.designacao}'>"


class Classe(db.Model):
    __tablename__ = 'classes'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(45), unique=True, nullable=False)
    status: Mapped[int] = mapped_column(default=1, server_default='1')
    nota_maxima: Mapped[float] = mapped_column(default=0, server_default='0')
    exame: Mapped[bool] = mapped_column(default=False)

    turmas: Mapped[list["Turma"]] = relationship(back_populates="classe")

    def __init__(self, designacao: str, **kw: t.Any) -> None:
        super().__init__(designacao=designacao, **kw)

    def __repr__(self):
        return f"<Classe id={self.id} designacao='{self.designacao}'>"


class Sala(db.Model):
    __tablename__ = 'salas'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(45), unique=True, nullable=False)
    capacidade: Mapped[t.Optional[int]] = mapped_column()

    def __repr__(self):
        return f"<Sala id={self.id} designacao='{self.designacao}'>"


class Periodo(db.Model):
    __tablename__ = 'periodos'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(45), unique=True, nullable=False)

    def __repr__(self):
        return f"<Periodo id={self.id} designacao='{self.designacao}'>"


class Disciplina(db.Model):
    __tablename__ = 'disciplinas'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(100), nullable=False)
    status: Mapped[int] = mapped_column(default=1, server_default='1')
    cadeira_especifica: Mapped[int] = mapped_column(default=0, server_default='0')

    curso_id: Mapped[int] = mapped_column(db.ForeignKey('cursos.id'), nullable=False, index=True)
    curso: Mapped["Curso"] = relationship(back_populates="disciplinas")

    # A mesma matéria pode existir em cursos diferentes
    __table_args__ = (db.UniqueConstraint('designacao', 'curso_id', name='_designacao_curso_uc'),)

    def __init__(self, designacao: str, curso_id: int, **kw: t.Any) -> None:
        super().__init__(designacao=designacao, curso_id=curso_id, **kw)

    def __repr__(self):
        return f"<Disciplina id={self.id} designacao='{self.designacao}' curso_id={self.curso_id}>"


class GradeCurricular(db.Model):
    __tablename__ = 'grades_curriculares'

    id: Mapped[int] = mapped_column(primary_key=True)
    disciplina_id: Mapped[int] = mapped_column(db.ForeignKey('disciplinas.id'), nullable=False, index=True)
    classe_id: Mapped[int] = mapped_column(db.ForeignKey('classes.id'), nullable=False, index=True)
    curso_id: Mapped[int] = mapped_column(db.ForeignKey('cursos.id'), nullable=False, index=True)
    status: Mapped[int] = mapped_column(default=1, server_default='1')

    disciplina: Mapped["Disciplina"] = relationship()
    classe: Mapped["Classe"] = relationship()
    curso: Mapped["Curso"] = relationship()

    def __repr__(self):
        return (f"<GradeCurricular id={self.id} disciplina_id={self.disciplina_id} "
                f"classe_id={self.classe_id} curso_id={self.curso_id}>")
