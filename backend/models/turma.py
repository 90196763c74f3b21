# backend/models/turma.py
from __future__ import annotations
import typing as t
from .database import db
from sqlalchemy.orm import Mapped, mapped_column, relationship

if t.TYPE_CHECKING:
    from .academico import AnoLectivo, Classe, Curso, Periodo, Sala
    from .docente import Docente
    from .financeiro import TipoServico


class Turma(db.Model):
    __tablename__ = 'turmas'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(45), nullable=False)
    max_alunos: Mapped[t.Optional[int]] = mapped_column()
    status: Mapped[str] = mapped_column(db.String(20), default='Activo', server_default='Activo')

    classe_id: Mapped[int] = mapped_column(db.ForeignKey('classes.id'), nullable=False, index=True)
    curso_id: Mapped[int] = mapped_column(db.ForeignKey('cursos.id'), nullable=False, index=True)
    # Sala, período e ano letivo podem ser definidos depois da criação da turma
    sala_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('salas.id'), index=True)
    periodo_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('periodos.id'), index=True)
    ano_lectivo_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('anos_lectivos.id'), index=True)

    classe: Mapped["Classe"] = relationship(back_populates="turmas")
    curso: Mapped["Curso"] = relationship(back_populates="turmas")
    sala: Mapped[t.Optional["Sala"]] = relationship()
    periodo: Mapped[t.Optional["Periodo"]] = relationship()
    ano_lectivo: Mapped[t.Optional["AnoLectivo"]] = relationship()

    def __init__(self, designacao: str, classe_id: int, curso_id: int, **kw: t.Any) -> None:
        super().__init__(designacao=designacao, classe_id=classe_id, curso_id=curso_id, **kw)

    def __repr__(self):
        return f"<Turma id={self.id} designacao='{self.designacao}'>"


class ServicoTurma(db.Model):
    __tablename__ = 'servicos_turma'

    id: Mapped[int] = mapped_column(primary_key=True)
    turma_id: Mapped[int] = mapped_column(db.ForeignKey('turmas.id'), nullable=False, index=True)
    tipo_servico_id: Mapped[int] = mapped_column(db.ForeignKey('tipos_servico.id'), nullable=False, index=True)

    turma: Mapped["Turma"] = relationship()
    tipo_servico: Mapped["TipoServico"] = relationship()

    def __repr__(self):
        return f"<ServicoTurma id={self.id} turma_id={self.turma_id} tipo_servico_id={self.tipo_servico_id}>"


class DiretorTurma(db.Model):
    __tablename__ = 'diretores_turma'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[t.Optional[str]] = mapped_column(db.String(45))
    turma_id: Mapped[int] = mapped_column(db.ForeignKey('turmas.id'), nullable=False, index=True)
    docente_id: Mapped[int] = mapped_column(db.ForeignKey('docentes.id'), nullable=False, index=True)
    ano_lectivo_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('anos_lectivos.id'))

    turma: Mapped["Turma"] = relationship()
    docente: Mapped["Docente"] = relationship()

    def __repr__(self):
        return f"<DiretorTurma id={self.id} turma_id={self.turma_id} docente_id={self.docente_id}>"


class DocenteTurma(db.Model):
    __tablename__ = 'docentes_turma'

    id: Mapped[int] = mapped_column(primary_key=True)
    turma_id: Mapped[int] = mapped_column(db.ForeignKey('turmas.id'), nullable=False, index=True)
    docente_id: Mapped[int] = mapped_column(db.ForeignKey('docentes.id'), nullable=False, index=True)

    turma: Mapped["Turma"] = relationship()
    docente: Mapped["Docente"] = relationship()

    __table_args__ = (db.UniqueConstraint('docente_id', 'turma_id', name='_docente_turma_uc'),)

    def __repr__(self):
        return f"<DocenteTurma docente_id={self.docente_id} turma_id={self.turma_id}>"
