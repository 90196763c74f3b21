# backend/models/aluno.py
from __future__ import annotations
import typing as t
from datetime import date
from .database import db
from sqlalchemy.orm import Mapped, mapped_column, relationship

if t.TYPE_CHECKING:
    from .academico import AnoLectivo, Curso
    from .financeiro import TipoServico
    from .turma import Turma
    from .utilizador import Utilizador


class Encarregado(db.Model):
    __tablename__ = 'encarregados'

    id: Mapped[int] = mapped_column(primary_key=True)
    nome: Mapped[str] = mapped_column(db.String(120), nullable=False)
    telefone: Mapped[t.Optional[str]] = mapped_column(db.String(20))
    email: Mapped[t.Optional[str]] = mapped_column(db.String(120))

    alunos: Mapped[list["Aluno"]] = relationship(back_populates="encarregado")

    def __repr__(self):
        return f"<Encarregado id={self.id} nome='{self.nome}'>"


class Aluno(db.Model):
    __tablename__ = 'alunos'

    id: Mapped[int] = mapped_column(primary_key=True)
    nome: Mapped[str] = mapped_column(db.String(120), nullable=False)
    sexo: Mapped[t.Optional[str]] = mapped_column(db.String(10))
    data_nascimento: Mapped[t.Optional[date]] = mapped_column(db.Date)
    n_documento_identificacao: Mapped[t.Optional[str]] = mapped_column(db.String(30))

    encarregado_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('encarregados.id'), index=True)
    utilizador_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('utilizadores.id'), index=True)

    encarregado: Mapped[t.Optional["Encarregado"]] = relationship(back_populates="alunos")
    utilizador: Mapped[t.Optional["Utilizador"]] = relationship()
    matriculas: Mapped[list["Matricula"]] = relationship(back_populates="aluno")

    def __init__(self, nome: str, **kw: t.Any) -> None:
        super().__init__(nome=nome, **kw)

    def __repr__(self):
        return f"<Aluno id={self.id} nome='{self.nome}'>"


class Matricula(db.Model):
    __tablename__ = 'matriculas'

    id: Mapped[int] = mapped_column(primary_key=True)
    data_matricula: Mapped[date] = mapped_column(db.Date, default=date.today)
    status: Mapped[int] = mapped_column(default=1, server_default='1')

    aluno_id: Mapped[int] = mapped_column(db.ForeignKey('alunos.id'), nullable=False, index=True)
    curso_id: Mapped[int] = mapped_column(db.ForeignKey('cursos.id'), nullable=False, index=True)

    aluno: Mapped["Aluno"] = relationship(back_populates="matriculas")
    curso: Mapped["Curso"] = relationship()
    confirmacoes: Mapped[list["Confirmacao"]] = relationship(back_populates="matricula")

    def __init__(self, aluno_id: int, curso_id: int, **kw: t.Any) -> None:
        super().__init__(aluno_id=aluno_id, curso_id=curso_id, **kw)

    def __repr__(self):
        return f"<Matricula id={self.id} aluno_id={self.aluno_id} curso_id={self.curso_id}>"


class Confirmacao(db.Model):
    __tablename__ = 'confirmacoes'

    id: Mapped[int] = mapped_column(primary_key=True)
    data_confirmacao: Mapped[date] = mapped_column(db.Date, default=date.today)
    classificacao: Mapped[t.Optional[str]] = mapped_column(db.String(45))

    matricula_id: Mapped[int] = mapped_column(db.ForeignKey('matriculas.id'), nullable=False, index=True)
    turma_id: Mapped[int] = mapped_column(db.ForeignKey('turmas.id'), nullable=False, index=True)
    ano_lectivo_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('anos_lectivos.id'))

    matricula: Mapped["Matricula"] = relationship(back_populates="confirmacoes")
    turma: Mapped["Turma"] = relationship()
    ano_lectivo: Mapped[t.Optional["AnoLectivo"]] = relationship()

    def __init__(self, matricula_id: int, turma_id: int, **kw: t.Any) -> None:
        super().__init__(matricula_id=matricula_id, turma_id=turma_id, **kw)

    def __repr__(self):
        return f"<Confirmacao id={self.id} matricula_id={self.matricula_id} turma_id={self.turma_id}>"


class ServicoAluno(db.Model):
    __tablename__ = 'servicos_aluno'

    id: Mapped[int] = mapped_column(primary_key=True)
    aluno_id: Mapped[int] = mapped_column(db.ForeignKey('alunos.id'), nullable=False, index=True)
    turma_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('turmas.id'), index=True)
    tipo_servico_id: Mapped[int] = mapped_column(db.ForeignKey('tipos_servico.id'), nullable=False, index=True)
    status: Mapped[int] = mapped_column(default=1, server_default='1')

    aluno: Mapped["Aluno"] = relationship()
    turma: Mapped[t.Optional["Turma"]] = relationship()
    tipo_servico: Mapped["TipoServico"] = relationship()

    def __repr__(self):
        return f"<ServicoAluno id={self.id} aluno_id={self.aluno_id} tipo_servico_id={self.tipo_servico_id}>"
