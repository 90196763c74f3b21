# backend/services/deletion_store.py

from sqlalchemy import select, text
from sqlalchemy.orm import scoped_session
from ..models.database import db


class DeletionStore:
    """
    Acesso ao banco usado pelo motor de exclusão.
    Opera sobre uma única sessão: leituras do planejamento e exclusões da
    execução ficam na mesma transação.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    # --- Transação ---

    def _sessao_atual(self):
        # O scoped_session do Flask-SQLAlchemy não expõe in_transaction()
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def begin(self):
        sessao = self._sessao_atual()
        if not sessao.in_transaction():
            sessao.begin()

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def apply_statement_timeout(self, seconds):
        """Limita as próximas instruções da transação atual (somente PostgreSQL)."""
        if seconds is None:
            return
        if self.session.get_bind().dialect.name == 'postgresql':
            # statement_timeout = 0 desativaria o limite
            milissegundos = max(1, int(seconds * 1000))
            self.session.execute(text(f"SET LOCAL statement_timeout = {milissegundos}"))

    # --- Consultas ---

    def find_by_id(self, model, entity_id):
        return self.session.get(model, entity_id)

    def count_where(self, model, column, ids):
        if not ids:
            return 0
        coluna = getattr(model, column)
        return self.session.scalar(
            select(db.func.count()).select_from(model).where(coluna.in_(ids))
        ) or 0

    def select_ids_where(self, model, column, ids):
        if not ids:
            return []
        coluna = getattr(model, column)
        return self.session.scalars(
            select(model.id).where(coluna.in_(ids)).order_by(model.id)
        ).all()

    def delete_where(self, model, column, ids):
        """Exclui as linhas cujo `column` está em `ids` e retorna quantas foram removidas."""
        if not ids:
            return 0
        coluna = getattr(model, column)
        return self.session.query(model).filter(coluna.in_(ids)).delete(synchronize_session=False)
