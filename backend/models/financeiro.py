# backend/models/financeiro.py
from __future__ import annotations
import typing as t
from datetime import datetime, timezone
from decimal import Decimal
from .database import db
from sqlalchemy.orm import Mapped, mapped_column, relationship

if t.TYPE_CHECKING:
    from .academico import AnoLectivo, Classe
    from .aluno import Aluno


class Moeda(db.Model):
    __tablename__ = 'moedas'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(45), unique=True, nullable=False)

    tipos_servico: Mapped[list["TipoServico"]] = relationship(back_populates="moeda")

    def __repr__(self):
        return f"<Moeda id={self.id} designacao='{self.designacao}'>"


class CategoriaServico(db.Model):
    __tablename__ = 'categorias_servico'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(100), unique=True, nullable=False)

    tipos_servico: Mapped[list["TipoServico"]] = relationship(back_populates="categoria")

    def __repr__(self):
        return f"<CategoriaServico id={self.id} designacao='{self.designacao}'>"


class TipoServico(db.Model):
    __tablename__ = 'tipos_servico'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(100), nullable=False)
    preco: Mapped[Decimal] = mapped_column(db.Numeric(12, 2), default=0)
    descricao: Mapped[t.Optional[str]] = mapped_column(db.String(255))
    # Propina, multa, emolumento...
    tipo_servico: Mapped[t.Optional[str]] = mapped_column(db.String(45))

    moeda_id: Mapped[int] = mapped_column(db.ForeignKey('moedas.id'), nullable=False, index=True)
    categoria_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('categorias_servico.id'), index=True)

    moeda: Mapped["Moeda"] = relationship(back_populates="tipos_servico")
    categoria: Mapped[t.Optional["CategoriaServico"]] = relationship(back_populates="tipos_servico")

    def __init__(self, designacao: str, moeda_id: int, **kw: t.Any) -> None:
        super().__init__(designacao=designacao, moeda_id=moeda_id, **kw)

    def __repr__(self):
        return f"<TipoServico id={self.id} designacao='{self.designacao}'>"


class PropinaClasse(db.Model):
    __tablename__ = 'propinas_classe'

    id: Mapped[int] = mapped_column(primary_key=True)
    valor: Mapped[Decimal] = mapped_column(db.Numeric(12, 2), default=0)
    classe_id: Mapped[int] = mapped_column(db.ForeignKey('classes.id'), nullable=False, index=True)
    tipo_servico_id: Mapped[int] = mapped_column(db.ForeignKey('tipos_servico.id'), nullable=False, index=True)
    ano_lectivo_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('anos_lectivos.id'))

    classe: Mapped["Classe"] = relationship()
    tipo_servico: Mapped["TipoServico"] = relationship()
    ano_lectivo: Mapped[t.Optional["AnoLectivo"]] = relationship()

    def __repr__(self):
        return f"<PropinaClasse id={self.id} classe_id={self.classe_id} valor={self.valor}>"


class LimitePropina(db.Model):
    """Dia limite de pagamento da propina, por classe."""
    __tablename__ = 'limites_propina'

    id: Mapped[int] = mapped_column(primary_key=True)
    dia_limite: Mapped[int] = mapped_column(nullable=False)
    percentagem_multa: Mapped[t.Optional[Decimal]] = mapped_column(db.Numeric(5, 2))
    classe_id: Mapped[int] = mapped_column(db.ForeignKey('classes.id'), nullable=False, index=True)

    classe: Mapped["Classe"] = relationship()

    def __repr__(self):
        return f"<LimitePropina id={self.id} classe_id={self.classe_id} dia={self.dia_limite}>"


class MesClasse(db.Model):
    """Meses letivos cobrados para uma classe."""
    __tablename__ = 'meses_classe'

    id: Mapped[int] = mapped_column(primary_key=True)
    mes: Mapped[str] = mapped_column(db.String(20), nullable=False)
    classe_id: Mapped[int] = mapped_column(db.ForeignKey('classes.id'), nullable=False, index=True)

    classe: Mapped["Classe"] = relationship()

    def __repr__(self):
        return f"<MesClasse id={self.id} classe_id={self.classe_id} mes='{self.mes}'>"


class FormaPagamento(db.Model):
    __tablename__ = 'formas_pagamento'

    id: Mapped[int] = mapped_column(primary_key=True)
    designacao: Mapped[str] = mapped_column(db.String(45), unique=True, nullable=False)

    def __repr__(self):
        return f"<FormaPagamento id={self.id} designacao='{self.designacao}'>"


class Pagamento(db.Model):
    __tablename__ = 'pagamentos'

    id: Mapped[int] = mapped_column(primary_key=True)
    valor: Mapped[Decimal] = mapped_column(db.Numeric(12, 2), nullable=False)
    mes: Mapped[t.Optional[str]] = mapped_column(db.String(20))
    data: Mapped[datetime] = mapped_column(default=lambda: datetime.now(timezone.utc))

    aluno_id: Mapped[int] = mapped_column(db.ForeignKey('alunos.id'), nullable=False, index=True)
    tipo_servico_id: Mapped[int] = mapped_column(db.ForeignKey('tipos_servico.id'), nullable=False, index=True)
    forma_pagamento_id: Mapped[t.Optional[int]] = mapped_column(db.ForeignKey('formas_pagamento.id'), index=True)

    aluno: Mapped["Aluno"] = relationship()
    tipo_servico: Mapped["TipoServico"] = relationship()
    forma_pagamento: Mapped[t.Optional["FormaPagamento"]] = relationship()

    def __repr__(self):
        return f"<Pagamento id={self.id} aluno_id={self.aluno_id} valor={self.valor}>"
